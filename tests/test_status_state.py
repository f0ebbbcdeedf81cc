from snap.status_state import IDLE_MESSAGE, StatusState


def test_initial_state():
    state = StatusState()

    assert state.message == IDLE_MESSAGE
    assert state.isProcessing is False
    assert state.reset_pending is False


def test_result_message_returns_to_idle(qtbot):
    state = StatusState(reset_ms=50)

    state.update_status("✅ Image resized for App Store!")

    assert state.message == "✅ Image resized for App Store!"
    assert state.reset_pending
    qtbot.waitUntil(lambda: state.message == IDLE_MESSAGE, timeout=2000)


def test_failure_message_also_resets(qtbot):
    state = StatusState(reset_ms=50)

    with qtbot.waitSignal(state.messageChanged, timeout=2000) as blocker:
        state.update_status("❌ Failed to resize image. Please try again.")
        state.update_status("❌ Failed to resize image. Please try again.")
    assert blocker.args == ["❌ Failed to resize image. Please try again."]

    qtbot.waitUntil(lambda: state.message == IDLE_MESSAGE, timeout=2000)


def test_processing_message_does_not_schedule_reset():
    state = StatusState(reset_ms=50)

    state.update_status("Resizing image...", is_processing=True)

    assert state.isProcessing is True
    assert state.reset_pending is False


def test_plain_message_does_not_schedule_reset():
    state = StatusState(reset_ms=50)

    state.update_status("Something else")

    assert state.reset_pending is False


def test_reset_skipped_while_processing(qtbot):
    state = StatusState(reset_ms=50)
    state.update_status("✅ iPhone mockup generated successfully!")

    state.update_status("Processing screenshot...", is_processing=True)
    qtbot.wait(150)

    assert state.message == "Processing screenshot..."
    assert state.isProcessing is True


def test_processing_flag_signal(qtbot):
    state = StatusState()

    with qtbot.waitSignal(state.processingChanged, timeout=1000) as blocker:
        state.update_status("Resizing image...", is_processing=True)
    assert blocker.args == [True]

    with qtbot.waitSignal(state.processingChanged, timeout=1000) as blocker:
        state.update_status("✅ Image resized for App Store!")
    assert blocker.args == [False]
