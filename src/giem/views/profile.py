import streamlit as st

from giem.ui.theme import footer
from giem.ui.ui import card
from giem.utils.auth import UserProfile, add_team_member, default_team, remove_team_member


def _render_info(user: UserProfile) -> None:
    with card("📧 Email Corporativo"):
        st.write(user.email)
    with card("📞 Telefone de Contato"):
        st.write(user.phone)
    if not user.is_admin:
        st.warning("Acesso restrito. Entre em contato com o suporte Diego para alterar suas permissões.")


def _render_team() -> None:
    """Mock team management: changes live only in this session."""
    team = st.session_state.setdefault("team", default_team())

    with st.expander("➕ Adicionar Novo Operador"):
        with st.form("add-operator", clear_on_submit=True, border=False):
            name = st.text_input("Nome")
            email = st.text_input("Email")
            if st.form_submit_button("Adicionar", type="primary"):
                try:
                    st.session_state["team"] = add_team_member(team, name, email)
                except ValueError as e:
                    st.error(str(e))
                else:
                    st.rerun()

    for member in team:
        left, right = st.columns([5, 1])
        left.markdown(f"**{member.name}**  \nOperador GieM · {member.email}")
        if right.button("🗑️", key=f"team-del-{member.id}"):
            st.session_state["team"] = remove_team_member(team, member.id)
            st.rerun()


def render_profile(user: UserProfile, on_logout) -> None:
    head, out = st.columns([4, 1])
    head.subheader(f"Perfil de {'Gestão' if user.is_admin else 'Operador'}")
    if out.button("Sair", key="profile-logout"):
        on_logout()
        st.rerun()

    with st.container(border=True):
        st.markdown(f"### {user.initial} · {user.name}")
        st.caption("🛡️ Administrador Master" if user.is_admin else "👤 Operador de Carga")

    if user.is_admin:
        info_tab, team_tab = st.tabs(["Meus Dados", "Gerenciar Equipe"])
        with info_tab:
            _render_info(user)
        with team_tab:
            _render_team()
    else:
        _render_info(user)

    footer("Powered by Floxhub Architecture")
