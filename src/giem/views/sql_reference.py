import streamlit as st

from giem.ui.theme import page_header
from giem.ui.ui import card
from giem.utils.config import BUCKET_NAME, RECEIPTS_TABLE

SCHEMA_SQL = f"""
-- TABELA PRINCIPAL
create table {RECEIPTS_TABLE} (
  id uuid default gen_random_uuid() primary key,
  created_at timestamptz default now(),
  nf_number text not null,
  receiver_name text,
  product_description text,
  delivery_date timestamptz,
  image_path text,
  content_type text,
  user_id uuid references auth.users(id) default auth.uid()
);

-- OTIMIZAÇÃO DE BUSCA
create index idx_receipts_nf_number on {RECEIPTS_TABLE}(nf_number);
create index idx_receipts_receiver_name on {RECEIPTS_TABLE}(receiver_name);
create index idx_receipts_delivery_date on {RECEIPTS_TABLE}(delivery_date);

-- SEGURANÇA (RLS)
alter table {RECEIPTS_TABLE} enable row level security;

create policy "Private User Access"
on {RECEIPTS_TABLE} for all
using (auth.uid() = user_id);
""".strip()


def render_sql_reference() -> None:
    page_header("🛠️ Configuração Supabase", "Provisione seu banco de dados para o GieM.")

    with card("1 · Esquema de Dados & Segurança", "Execute no SQL Editor para criar a infraestrutura necessária:"):
        st.code(SCHEMA_SQL, language="sql")

    with card("2 · Armazenamento (Storage)"):
        st.markdown(
            f"""
1. Acesse a aba **Storage** no Supabase.
2. Crie um bucket chamado `{BUCKET_NAME}`.
3. Marque como **Public** para facilitar o upload via frontend.
            """
        )
