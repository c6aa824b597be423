import streamlit as st

from giem.ui.theme import footer
from giem.utils.auth import InvalidCredentials, authenticate

INVALID_MSG = "Credenciais inválidas. Verifique seus dados."


def render_login(footer_text: str = "Desenvolvido por Floxhub © 2024") -> None:
    """Mock login; on success stores the UserProfile in session state and reruns."""
    st.markdown(
        '<div class="giem-header" style="text-align:center">'
        "<h1>📦 GieM</h1><div class='tag'>Gestão Inteligente de Entrega</div></div>",
        unsafe_allow_html=True,
    )

    with st.form("login", border=True):
        email = st.text_input("Email de acesso", placeholder="nome@empresa.com")
        password = st.text_input("Senha", type="password", placeholder="••••••••")
        submitted = st.form_submit_button("Entrar no Sistema", type="primary", width="stretch")

    if submitted:
        if not email or not password:
            st.error(INVALID_MSG)
        else:
            try:
                st.session_state["user"] = authenticate(email, password)
            except InvalidCredentials:
                st.error(INVALID_MSG)
            else:
                st.rerun()

    footer(footer_text)


def logout() -> None:
    for key in ("user", "team"):
        st.session_state.pop(key, None)
    st.session_state["active_tab"] = "dashboard"
