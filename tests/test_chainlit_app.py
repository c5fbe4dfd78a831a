from cherry.chainlit_app import _build_welcome_message, _is_submittable


def test_is_submittable_rejects_blank_text() -> None:
    assert not _is_submittable("", is_loading=False)
    assert not _is_submittable("   \n", is_loading=False)
    assert not _is_submittable(None, is_loading=False)


def test_is_submittable_rejects_while_loading() -> None:
    assert not _is_submittable("hello", is_loading=True)


def test_is_submittable_accepts_text_when_idle() -> None:
    assert _is_submittable(" hello ", is_loading=False)


def test_welcome_message_greets_as_cherry() -> None:
    message = _build_welcome_message()

    assert "Cherry" in message
    assert "有什么我可以帮你的吗" in message
