import pytest

from ticket_panel.errors import ConfigStoreError, TicketPanelError, UserFriendlyError


def test_ticket_panel_error_inheritance():
    assert issubclass(TicketPanelError, Exception)


def test_user_friendly_error_inheritance():
    assert issubclass(UserFriendlyError, TicketPanelError)


def test_config_store_error_inheritance():
    assert issubclass(ConfigStoreError, TicketPanelError)
    assert not issubclass(ConfigStoreError, UserFriendlyError)


def test_ticket_panel_error_message():
    msg = "test error"
    with pytest.raises(TicketPanelError) as exc_info:
        raise TicketPanelError(msg)
    assert str(exc_info.value) == msg


def test_user_friendly_error_attributes():
    internal_msg = "internal error log"
    user_msg = "User-facing message"

    with pytest.raises(UserFriendlyError) as exc_info:
        raise UserFriendlyError(internal_msg, user_msg)

    assert str(exc_info.value) == internal_msg
    assert exc_info.value.user_message == user_msg
