import time

from orgchat.utils import org_state
from orgchat.utils.org_state import (
    create_org_state,
    organization_from_state,
    verify_org_state,
)


def test_signed_state_round_trip():
    payload = verify_org_state(create_org_state("org-b", "Someone@Example.com"))

    assert payload is not None
    assert payload["organization_id"] == "org-b"
    assert payload["email"] == "someone@example.com"


def test_tampered_payload_is_rejected():
    state = create_org_state("org-a")
    other_payload, _ = create_org_state("org-b").split(".")
    _, signature = state.split(".")

    assert verify_org_state(f"{other_payload}.{signature}") is None


def test_malformed_state_is_rejected():
    assert verify_org_state("") is None
    assert verify_org_state("no-dot") is None
    assert verify_org_state("a.b.c") is None


def test_expired_state_is_rejected(monkeypatch):
    state = create_org_state("org-a")
    real_time = time.time
    monkeypatch.setattr(org_state.time, "time", lambda: real_time() + 10 * 86400)

    assert verify_org_state(state) is None


def test_organization_from_state_checks_email_binding():
    state = create_org_state("org-b", "owner@example.com")

    assert organization_from_state(state, "OWNER@example.com") == "org-b"
    assert organization_from_state(state, "intruder@example.com") is None
    assert organization_from_state(state, None) is None
    assert organization_from_state(None, "owner@example.com") is None


def test_unbound_state_accepts_any_email():
    assert organization_from_state(create_org_state("org-a"), "x@example.com") == "org-a"
