"""Tests for cart ownership resolution."""

from storefront.identity.ownership import BySession, ByUser, cart_item_id, resolve_owner


class TestResolveOwner:
    def test_user_id_only(self):
        assert resolve_owner(user_id="42") == ByUser(user_id="42")

    def test_session_id_only(self):
        assert resolve_owner(session_id="sess-abc") == BySession(session_id="sess-abc")

    def test_user_id_wins_over_session(self):
        assert resolve_owner(user_id="42", session_id="sess-abc") == ByUser(user_id="42")

    def test_neither_resolves_to_none(self):
        assert resolve_owner() is None

    def test_empty_values_count_as_absent(self):
        assert resolve_owner(user_id="", session_id="") is None
        assert resolve_owner(user_id="", session_id="sess-abc") == BySession(session_id="sess-abc")

    def test_numeric_user_id_is_normalised_to_text(self):
        assert resolve_owner(user_id=7) == ByUser(user_id="7")


class TestOwnerScopes:
    def test_user_scope_clears_session_column(self):
        assert ByUser(user_id="42").fields() == {"user_id": "42", "session_id": None}
        assert ByUser(user_id="42").criteria() == {"user_id": "42"}

    def test_session_scope_clears_user_column(self):
        assert BySession(session_id="s1").fields() == {"user_id": None, "session_id": "s1"}
        assert BySession(session_id="s1").criteria() == {"session_id": "s1"}

    def test_keys_do_not_collide_across_scopes(self):
        assert ByUser(user_id="abc").key != BySession(session_id="abc").key


class TestCartItemId:
    def test_is_stable_for_owner_and_product(self):
        owner = ByUser(user_id="42")
        assert cart_item_id(owner, "p1") == cart_item_id(ByUser(user_id="42"), "p1")

    def test_differs_per_product(self):
        owner = ByUser(user_id="42")
        assert cart_item_id(owner, "p1") != cart_item_id(owner, "p2")

    def test_user_and_session_with_same_value_get_different_items(self):
        assert cart_item_id(ByUser(user_id="x"), "p1") != cart_item_id(BySession(session_id="x"), "p1")
