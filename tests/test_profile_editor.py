"""Behavioural tests for the profile editor flows."""
from __future__ import annotations

import asyncio

import pytest

from conftest import make_profile
from onlyus import constants as text
from onlyus.ui.state import ImageSource, PrivacyField


# ---------------------------------------------------------------------------
# Avatar
# ---------------------------------------------------------------------------


def test_cancelled_source_dialog_touches_no_collaborator(editor, dialogs, storage, auth, notifier):
    dialogs.source = None

    asyncio.run(editor.update_profile_image())

    assert storage.calls == []
    assert auth.calls == []
    assert editor.state.upload.is_uploading is False
    assert notifier.successes == [] and notifier.errors == []


@pytest.mark.parametrize(
    "source, expected_pick",
    [(ImageSource.CAMERA, "camera"), (ImageSource.GALLERY, "gallery")],
)
def test_avatar_upload_uses_chosen_source(editor, dialogs, storage, source, expected_pick):
    dialogs.source = source

    asyncio.run(editor.update_profile_image())

    assert storage.calls[0] == expected_pick
    assert storage.calls[1] == "upload"


def test_cancelled_picker_aborts_without_upload(editor, storage, auth, notifier):
    storage.gallery_image = None

    asyncio.run(editor.update_profile_image())

    assert storage.calls == ["gallery"]
    assert auth.calls == []
    assert editor.state.upload.is_uploading is False
    assert notifier.errors == []


def test_successful_avatar_upload_updates_photo_and_notifies_once(editor, storage, auth, notifier):
    transitions: list[bool] = []
    last = [editor.state.upload.is_uploading]

    def _track(state):
        if state.upload.is_uploading != last[0]:
            transitions.append(state.upload.is_uploading)
            last[0] = state.upload.is_uploading

    editor.subscribe(_track)

    asyncio.run(editor.update_profile_image())

    assert auth.calls == [("update_profile", {"photo_url": storage.upload_url})]
    assert transitions == [True, False]
    assert notifier.successes == [text.PROFILE_UPDATED]
    assert notifier.errors == []


def test_upload_progress_is_reflected_while_uploading(editor):
    seen: list[float] = []
    editor.subscribe(lambda state: seen.append(state.upload.progress) if state.upload.is_uploading else None)

    asyncio.run(editor.update_profile_image())

    assert 0.5 in seen and 1.0 in seen
    assert editor.state.upload.progress == 0.0


@pytest.mark.parametrize("url", [None, ""])
def test_empty_upload_url_reports_error(editor, storage, auth, notifier, url):
    storage.upload_url = url

    asyncio.run(editor.update_profile_image())

    assert auth.calls == []
    assert notifier.errors == [text.ERROR_UPLOAD_IMAGE]
    assert editor.state.upload.is_uploading is False


def test_upload_exception_reports_error_and_clears_flag(editor, storage, notifier):
    storage.upload_error = RuntimeError("disk full")

    asyncio.run(editor.update_profile_image())

    assert notifier.errors == ["Error updating profile: disk full"]
    assert editor.state.upload.is_uploading is False


def test_profile_update_failure_after_upload_reports_error(editor, auth, notifier):
    auth.failures["update_profile"] = RuntimeError("permission denied")

    asyncio.run(editor.update_profile_image())

    assert notifier.successes == []
    assert notifier.errors == ["Error updating profile: permission denied"]
    assert editor.state.upload.is_uploading is False


def test_second_avatar_request_while_uploading_is_ignored(editor, auth, dialogs):
    async def scenario():
        auth.gate = asyncio.Event()
        first = asyncio.create_task(editor.update_profile_image())
        await asyncio.sleep(0)
        while not auth.calls:
            await asyncio.sleep(0)
        assert editor.state.upload.is_uploading is True
        await editor.update_profile_image()
        auth.gate.set()
        await first

    asyncio.run(scenario())

    assert dialogs.source_requests == 1
    assert auth.names() == ["update_profile"]


# ---------------------------------------------------------------------------
# Display name
# ---------------------------------------------------------------------------


def test_start_editing_copies_current_name(editor):
    editor.start_editing()

    assert editor.state.edit.is_editing is True
    assert editor.state.edit.buffer == "Sam Rivera"


def test_cancel_discards_buffer_without_remote_call(editor, auth):
    editor.start_editing()
    editor.set_name_buffer("Someone Else")

    editor.cancel_editing()

    assert editor.state.edit.is_editing is False
    assert editor.state.edit.buffer == ""
    assert auth.calls == []


def test_save_trims_whitespace(editor, auth, notifier):
    editor.start_editing()
    editor.set_name_buffer("  Alex  ")

    asyncio.run(editor.save_display_name())

    assert auth.calls == [("update_profile", {"display_name": "Alex"})]
    assert editor.state.edit.is_editing is False
    assert notifier.successes == [text.PROFILE_UPDATED]


@pytest.mark.parametrize("buffer", ["", "   ", "\t\n"])
def test_save_blank_name_is_silent_noop(editor, auth, notifier, buffer):
    editor.start_editing()
    editor.set_name_buffer(buffer)

    asyncio.run(editor.save_display_name())

    assert auth.calls == []
    assert editor.state.edit.is_editing is True
    assert notifier.successes == [] and notifier.errors == []


def test_failed_save_keeps_edit_mode_and_buffer(editor, auth, notifier):
    auth.failures["update_profile"] = RuntimeError("offline")
    editor.start_editing()
    editor.set_name_buffer("Alex")

    asyncio.run(editor.save_display_name())

    assert editor.state.edit.is_editing is True
    assert editor.state.edit.buffer == "Alex"
    assert editor.state.edit.is_saving is False
    assert notifier.errors == ["Failed to update name: offline"]


def test_save_outside_edit_mode_does_nothing(editor, auth):
    asyncio.run(editor.save_display_name())

    assert auth.calls == []


def test_second_save_while_saving_is_ignored(editor, auth, notifier):
    editor.start_editing()
    editor.set_name_buffer("Alex")

    async def scenario():
        auth.gate = asyncio.Event()
        task = asyncio.create_task(editor.save_display_name())
        while not auth.calls:
            await asyncio.sleep(0)
        assert editor.state.edit.is_saving is True
        await editor.save_display_name()
        auth.gate.set()
        await task

    asyncio.run(scenario())

    assert auth.calls == [("update_profile", {"display_name": "Alex"})]
    assert notifier.successes == [text.PROFILE_UPDATED]
    assert editor.state.edit.is_editing is False


# ---------------------------------------------------------------------------
# Privacy toggles
# ---------------------------------------------------------------------------


def test_online_status_rollback_on_network_error(editor, auth, notifier):
    auth.failures["update_user_privacy_settings"] = RuntimeError("network error")
    assert editor.state.privacy.show_online_status is True

    asyncio.run(editor.set_show_online_status(False))

    assert editor.state.privacy.show_online_status is True
    assert len(notifier.errors) == 1
    assert "network error" in notifier.errors[0]
    assert notifier.errors[0] == "Failed to update online status: network error"


@pytest.mark.parametrize(
    "method, field",
    [("set_show_online_status", "show_online_status"), ("set_show_last_seen", "show_last_seen")],
)
def test_privacy_toggle_failure_restores_prior_value(editor, auth, method, field):
    auth.failures["update_user_privacy_settings"] = RuntimeError("boom")
    before = getattr(editor.state.privacy, field)

    asyncio.run(getattr(editor, method)(not before))

    assert getattr(editor.state.privacy, field) == before
    assert editor.state.privacy.pending == frozenset()


def test_privacy_toggle_is_applied_before_remote_call_resolves(editor, auth):
    observed: list[bool] = []

    async def scenario():
        auth.gate = asyncio.Event()
        task = asyncio.create_task(editor.set_show_last_seen(False))
        while not auth.calls:
            await asyncio.sleep(0)
        observed.append(editor.state.privacy.show_last_seen)
        auth.gate.set()
        await task

    asyncio.run(scenario())

    assert observed == [False]
    assert auth.calls == [("update_user_privacy_settings", {"show_last_seen": False})]
    assert editor.state.privacy.show_last_seen is False


def test_privacy_toggle_success_notifies(editor, notifier):
    asyncio.run(editor.set_show_last_seen(False))

    assert notifier.successes == [text.LAST_SEEN_UPDATED]
    assert editor.state.privacy.pending == frozenset()


def test_flip_while_pending_is_ignored(editor, auth):
    async def scenario():
        auth.gate = asyncio.Event()
        task = asyncio.create_task(editor.set_show_online_status(False))
        while not auth.calls:
            await asyncio.sleep(0)
        assert PrivacyField.SHOW_ONLINE_STATUS in editor.state.privacy.pending
        await editor.set_show_online_status(True)
        auth.gate.set()
        await task

    asyncio.run(scenario())

    assert len(auth.calls) == 1
    assert editor.state.privacy.show_online_status is False


def test_toggle_to_same_value_is_noop(editor, auth):
    asyncio.run(editor.set_show_online_status(True))

    assert auth.calls == []


def test_remote_snapshot_seeds_privacy_mirror(editor, user_state):
    user_state.publish(make_profile(show_online_status=False, show_last_seen=False))

    assert editor.state.privacy.show_online_status is False
    assert editor.state.privacy.show_last_seen is False


# ---------------------------------------------------------------------------
# Local notification toggles
# ---------------------------------------------------------------------------


def test_notification_toggles_are_local_only(editor, auth):
    editor.set_notifications_enabled(False)
    editor.set_sound_enabled(False)
    editor.set_vibration_enabled(False)

    prefs = editor.notification_preferences
    assert (prefs.notifications_enabled, prefs.sound_enabled, prefs.vibration_enabled) == (False, False, False)
    assert auth.calls == []


# ---------------------------------------------------------------------------
# Account actions
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("method", ["sign_out", "delete_account"])
def test_dismissed_confirmation_never_calls_collaborator(editor, auth, dialogs, navigator, method):
    dialogs.confirm_answer = False

    asyncio.run(getattr(editor, method)())

    assert len(dialogs.confirmations) == 1
    assert auth.calls == []
    assert navigator.resets == 0


def test_sign_out_confirms_before_calling(editor, auth, dialogs, navigator):
    order: list[str] = []
    original_confirm = dialogs.confirm

    async def _confirm(**kwargs):
        order.append("confirm")
        return await original_confirm(**kwargs)

    dialogs.confirm = _confirm
    original_sign_out = auth.sign_out

    async def _sign_out():
        order.append("sign_out")
        await original_sign_out()

    auth.sign_out = _sign_out

    asyncio.run(editor.sign_out())

    assert order == ["confirm", "sign_out"]
    assert navigator.resets == 1
    assert dialogs.confirmations[0]["message"] == text.CONFIRM_SIGN_OUT


def test_delete_account_uses_destructive_confirmation(editor, auth, dialogs, navigator):
    asyncio.run(editor.delete_account())

    assert dialogs.confirmations[0]["destructive"] is True
    assert dialogs.confirmations[0]["message"] == text.CONFIRM_DELETE_ACCOUNT
    assert auth.names() == ["delete_account"]
    assert navigator.resets == 1


def test_account_action_while_another_runs_is_ignored(editor, auth, dialogs, navigator):
    async def scenario():
        auth.gate = asyncio.Event()
        task = asyncio.create_task(editor.sign_out())
        while not auth.calls:
            await asyncio.sleep(0)
        await editor.delete_account()
        await editor.sign_out()
        auth.gate.set()
        await task

    asyncio.run(scenario())

    assert len(dialogs.confirmations) == 1
    assert auth.names() == ["sign_out"]
    assert navigator.resets == 1


@pytest.mark.parametrize(
    "method, failure_key, prefix",
    [
        ("sign_out", "sign_out", "Failed to sign out"),
        ("delete_account", "delete_account", "Failed to delete account"),
    ],
)
def test_account_action_failure_stays_on_screen(editor, auth, navigator, notifier, method, failure_key, prefix):
    auth.failures[failure_key] = RuntimeError("server unavailable")

    asyncio.run(getattr(editor, method)())

    assert navigator.resets == 0
    assert notifier.errors == [f"{prefix}: server unavailable"]


# ---------------------------------------------------------------------------
# Informational dialogs
# ---------------------------------------------------------------------------


def test_about_and_support_dialogs(editor, dialogs):
    asyncio.run(editor.show_about())
    asyncio.run(editor.show_support())

    about_title, about_lines = dialogs.infos[0]
    support_title, support_lines = dialogs.infos[1]
    assert about_title == "About OnlyUs"
    assert text.VERSION_LABEL in about_lines
    assert support_title == text.SUPPORT
    assert any(text.SUPPORT_EMAIL in line for line in support_lines)
