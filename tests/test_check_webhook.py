from types import SimpleNamespace

from scripts.check_webhook import format_webhook_info


def test_polling_mode():
    text = format_webhook_info(SimpleNamespace(url="", pending_update_count=0,
                                               last_error_date=None, last_error_message=None))
    assert "long polling" in text


def test_webhook_with_last_error():
    text = format_webhook_info(SimpleNamespace(
        url="https://example.org/webhook",
        pending_update_count=3,
        last_error_date=1700000000,
        last_error_message="Connection refused",
    ))

    assert "https://example.org/webhook" in text
    assert "3" in text
    assert "Connection refused" in text
