"""
Mock login. Plaintext credentials, nothing persisted: the signed-in user lives
in st.session_state and disappears with the session.

Test credentials:
  Admin:    diego@floxhub.com / admin
  Operador: operador@floxhub.com / 1234
"""
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel

from giem.utils.logging_utils import log

ADMIN_EMAIL = "admin@floxhub.com"
ADMIN_PASSWORD = "admin"
OPERATOR_PASSWORD = "1234"


class InvalidCredentials(ValueError):
    pass


class UserProfile(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    role: Literal["admin", "operator"]

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else "Usuário"

    @property
    def initial(self) -> str:
        return self.name[:1].upper()


class TeamMember(BaseModel):
    id: str
    name: str
    email: str
    role: Literal["admin", "operator"] = "operator"


def authenticate(email: str, password: str) -> UserProfile:
    lower_email = (email or "").strip().lower()

    # Admin master
    if ("diego" in lower_email or lower_email == ADMIN_EMAIL) and password == ADMIN_PASSWORD:
        log.info("Admin login: %s", lower_email)
        return UserProfile(
            id="1",
            name="Diego Floxhub",
            email=email,
            phone="(11) 98765-4321",
            role="admin",
        )
    # Regular operators
    if password == OPERATOR_PASSWORD:
        log.info("Operator login: %s", lower_email)
        return UserProfile(
            id="2",
            name="Operador Logístico",
            email=email,
            phone="(11) 90000-0000",
            role="operator",
        )
    log.warning("Rejected login for %s", lower_email)
    raise InvalidCredentials("Login ou senha inválidos.")


def default_team() -> List[TeamMember]:
    return [
        TeamMember(id="1", name="Carlos Lima", email="carlos@gie.com"),
        TeamMember(id="2", name="Juliana Dias", email="juliana@gie.com"),
    ]


def add_team_member(team: List[TeamMember], name: str, email: str) -> List[TeamMember]:
    name, email = (name or "").strip(), (email or "").strip()
    if not name or not email:
        raise ValueError("Nome e email são obrigatórios")
    if any(m.email.lower() == email.lower() for m in team):
        raise ValueError("Operador já cadastrado")
    next_id = str(max((int(m.id) for m in team if m.id.isdigit()), default=0) + 1)
    return [*team, TeamMember(id=next_id, name=name, email=email)]


def remove_team_member(team: List[TeamMember], member_id: str) -> List[TeamMember]:
    return [m for m in team if m.id != member_id]
