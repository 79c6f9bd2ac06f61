"""Tests for the User aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.identity.events import UserRegistered, WalletConnected
from storefront.identity.user import User


class TestRegister:
    def test_register(self):
        user = User.register(username="satoshi", password="s3cret")

        assert user.username == "satoshi"
        assert user.wallet_address is None
        assert user.created_at is not None

        event = user._events[0]
        assert isinstance(event, UserRegistered)
        assert event.username == "satoshi"

    def test_register_with_wallet(self):
        user = User.register(username="satoshi", password="s3cret", wallet_address="0xabc")
        assert user.wallet_address == "0xabc"

    def test_username_is_required(self):
        with pytest.raises(ValidationError):
            User.register(username=None, password="s3cret")

    def test_username_length_is_bounded(self):
        with pytest.raises(ValidationError):
            User.register(username="x" * 51, password="s3cret")


class TestConnectWallet:
    def test_connect_wallet(self):
        user = User.register(username="satoshi", password="s3cret", wallet_address="0xold")
        user._events.clear()

        user.connect_wallet("0xnew")
        assert user.wallet_address == "0xnew"

        event = user._events[0]
        assert isinstance(event, WalletConnected)
        assert event.previous_wallet_address == "0xold"
        assert event.wallet_address == "0xnew"
