from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.grease.grease.core.exceptions import AuthenticationError
from src.grease.grease.members.model import Member
from src.grease.grease.members.service import AuthService

from tests.fakes import SEMESTER, InMemoryMembers, InMemorySemesters


@pytest.fixture
def auth():
    members = InMemoryMembers()
    members.add("pres.ident@example.com", section="Tenor 1", roles=["President"])
    members.members["pres.ident@example.com"] = Member(
        email="pres.ident@example.com",
        first_name="Pres",
        last_name="Ident",
        pass_hash=generate_password_hash("secret"),
    )
    members.add("no.hash@example.com")
    return AuthService(members, InMemorySemesters())


def test_login_builds_principal_for_current_semester(auth):
    principal = auth.authenticate("  pres.ident@example.com ", "secret")

    assert principal.email == "pres.ident@example.com"
    assert principal.roles == ("President",)
    assert principal.active_semester.semester == SEMESTER
    assert principal.section == "Tenor 1"


@pytest.mark.parametrize(
    "email, password",
    [
        ("pres.ident@example.com", "wrong"),
        ("nobody@example.com", "secret"),
        ("no.hash@example.com", ""),
    ],
)
def test_bad_credentials(auth, email, password):
    with pytest.raises(AuthenticationError) as exc:
        auth.authenticate(email, password)
    assert exc.value.status_code == 401


def test_load_principal_for_unknown_member(auth):
    with pytest.raises(AuthenticationError):
        auth.load_principal("ghost@example.com")
