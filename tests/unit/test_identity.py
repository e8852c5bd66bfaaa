"""Unit tests for IdentityContext change notifications."""
import pytest

from sync_client.identity import IdentityContext, IdentityUser


@pytest.mark.unit
class TestIdentityContext:
    def test_notifies_on_login_and_logout(self, identity, alice):
        seen = []
        identity.subscribe(seen.append)

        identity.login(alice)
        identity.logout()

        assert seen == [alice.id, None]
        assert not identity.is_authenticated

    def test_same_user_again_is_not_a_change(self, identity, alice):
        seen = []
        identity.subscribe(seen.append)
        identity.login(alice)
        identity.login(alice)
        identity.logout()
        identity.logout()
        assert seen == [alice.id, None]

    def test_switch_user_notifies_new_id(self, identity, alice, bob):
        seen = []
        identity.login(alice)
        identity.subscribe(seen.append)
        identity.login(bob)
        assert seen == [bob.id]
        assert identity.user.username == "bob"

    def test_unsubscribe(self, identity, alice):
        seen = []
        unsubscribe = identity.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        identity.login(alice)
        assert seen == []

    def test_user_parses_camel_case_payload(self):
        user = IdentityUser.model_validate(
            {"id": "u1", "username": "anna", "email": "anna@example.com", "emailVerified": True}
        )
        assert user.id == "u1"
        assert IdentityContext(user).user_id == "u1"
