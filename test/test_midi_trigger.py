"""
Unit tests for the MIDI trigger logic.
These tests run on CPython and MicroPython as they test pure logic.

Run with: python -m pytest test
     or: python test/test_midi_trigger.py
"""
import sys

# Add the src/lib path for imports (works on both CPython and MicroPython)
sys.path.insert(0, "src/lib")
sys.path.insert(0, "test")

try:
    from midi_trigger.midi_event import NoteOn, NoteOff, ProgramChange
    from midi_trigger.edge_translator import InputChannel, EdgeTranslator
    from midi_trigger.trigger_app import TriggerApp
    from midi_trigger.layouts import get_layout, get_layout_names, knock_layout
    from midi_trigger.hal_protocol import InputsHAL, MidiOutputHAL, DisplayHAL
except ImportError:
    # Try relative import for running from the test directory
    sys.path.insert(0, "../src/lib")
    from midi_trigger.midi_event import NoteOn, NoteOff, ProgramChange
    from midi_trigger.edge_translator import InputChannel, EdgeTranslator
    from midi_trigger.trigger_app import TriggerApp
    from midi_trigger.layouts import get_layout, get_layout_names, knock_layout
    from midi_trigger.hal_protocol import InputsHAL, MidiOutputHAL, DisplayHAL

from mock_hal import create_mock_hardware_port, MockMidiOutputHAL


def raises(exc_type, func, *args, **kwargs):
    """True if func(*args, **kwargs) raises exc_type."""
    try:
        func(*args, **kwargs)
    except exc_type:
        return True
    return False


def poll_all(translator, channel, samples):
    return [translator.poll(channel, s) for s in samples]


def transitions(samples, rising):
    """Count edges in samples, starting from an implicit False."""
    count = 0
    previous = False
    for s in samples:
        if rising and s and not previous:
            count += 1
        if not rising and previous and not s:
            count += 1
        previous = s
    return count


class TestMidiEvent:
    """Tests for event values and wire encoding."""

    def test_percussion_note_on_bytes(self):
        """Test kick on channel 10 encodes with status 0x99."""
        event = NoteOn(channel=10, note=35, velocity=127)
        assert event.to_bytes() == bytes([0x99, 0x23, 0x7F])

    def test_note_off_bytes(self):
        event = NoteOff(channel=1, note=60)
        assert event.to_bytes() == bytes([0x80, 60, 0])

    def test_program_change_is_two_bytes(self):
        event = ProgramChange(channel=16, program=5)
        assert event.to_bytes() == bytes([0xCF, 5])

    def test_default_velocities(self):
        assert NoteOn(1, 60).velocity == 127
        assert NoteOff(1, 60).velocity == 0

    def test_kind_names(self):
        assert NoteOn(1, 60).kind == "note_on"
        assert NoteOff(1, 60).kind == "note_off"
        assert ProgramChange(1, 0).kind == "program_change"

    def test_equality(self):
        assert NoteOn(1, 60) == NoteOn(1, 60, 127)
        assert NoteOn(1, 60) != NoteOff(1, 60)
        assert NoteOn(1, 60) != NoteOn(2, 60)
        assert len({NoteOn(1, 60), NoteOn(1, 60)}) == 1

    def test_out_of_range_values(self):
        assert raises(ValueError, NoteOn, 0, 60)
        assert raises(ValueError, NoteOn, 17, 60)
        assert raises(ValueError, NoteOn, 1, 128)
        assert raises(ValueError, NoteOff, 1, 60, -1)
        assert raises(ValueError, ProgramChange, 1, 200)
        assert raises(ValueError, NoteOn, 1, True)

    def test_repr(self):
        assert repr(NoteOn(10, 35)) == "NoteOn(channel=10, note=35, velocity=127)"


class TestInputChannel:
    """Tests for channel configuration."""

    def test_digital_sample(self):
        channel = InputChannel("a", 0, 60)
        assert channel.sample(True) is True
        assert channel.sample(False) is False
        assert not channel.is_analog

    def test_analog_threshold(self):
        channel = InputChannel("knock", 1, 38, midi_channel=10, threshold=500)
        assert channel.is_analog
        assert channel.sample(501) is True
        assert channel.sample(500) is False
        assert channel.sample(0) is False

    def test_read_only(self):
        channel = InputChannel("a", 0, 60)
        assert raises(AttributeError, setattr, channel, "note", 61)

    def test_invalid_config(self):
        assert raises(ValueError, InputChannel, "a", 0, 128)
        assert raises(ValueError, InputChannel, "a", 0, 60, midi_channel=0)
        assert raises(ValueError, InputChannel, "a", -1, 60)
        assert raises(ValueError, InputChannel, "a", 0, 60, program=128)


class TestEdgeTranslator:
    """Tests for rising/falling edge detection."""

    def setup_channel(self):
        channel = InputChannel("a", 0, 60, midi_channel=1)
        return EdgeTranslator([channel]), channel

    def test_press_hold_release(self):
        """Test [F, T, T, F] emits only at indices 1 and 3."""
        translator, channel = self.setup_channel()
        events = poll_all(translator, channel, [False, True, True, False])
        assert events == [None, NoteOn(1, 60, 127), None, NoteOff(1, 60, 0)]

    def test_held_from_start(self):
        """Test [T, T] emits a single Note On at index 0."""
        translator, channel = self.setup_channel()
        events = poll_all(translator, channel, [True, True])
        assert events == [NoteOn(1, 60, 127), None]
        assert translator.is_active(channel)

    def test_repeated_samples_are_idempotent(self):
        translator, channel = self.setup_channel()
        events = poll_all(translator, channel, [True] * 50)
        assert len([e for e in events if e is not None]) == 1
        events = poll_all(translator, channel, [False] * 50)
        assert len([e for e in events if e is not None]) == 1

    def test_idle_channel_never_emits(self):
        translator, channel = self.setup_channel()
        assert poll_all(translator, channel, [False] * 10) == [None] * 10

    def test_edge_counts_match_transitions(self):
        patterns = [
            [],
            [True],
            [False, True, False, True, False],
            [True, True, False, False, True],
            [True, False] * 7,
            [False, False, True, True, True, False, True],
        ]
        for samples in patterns:
            translator, channel = self.setup_channel()
            events = [e for e in poll_all(translator, channel, samples) if e is not None]
            ons = [e for e in events if e.kind == "note_on"]
            offs = [e for e in events if e.kind == "note_off"]
            assert len(ons) == transitions(samples, rising=True), str(samples)
            assert len(offs) == transitions(samples, rising=False), str(samples)

    def test_events_alternate(self):
        translator, channel = self.setup_channel()
        samples = [True, True, False, True, False, False, True, True, False]
        events = [e for e in poll_all(translator, channel, samples) if e is not None]
        for first, second in zip(events, events[1:]):
            assert first.kind != second.kind
        assert events[0].kind == "note_on"

    def test_channels_are_independent(self):
        """Test A [T, F] and B [F, F] in either polling order."""
        a = InputChannel("a", 0, 60)
        b = InputChannel("b", 1, 64)
        for order in ([a, b], [b, a]):
            translator = EdgeTranslator([a, b])
            emitted = {"a": [], "b": []}
            samples = {"a": [True, False], "b": [False, False]}
            for i in range(2):
                for channel in order:
                    emitted[channel.name].append(
                        translator.poll(channel, samples[channel.name][i])
                    )
            assert emitted["a"] == [NoteOn(1, 60), NoteOff(1, 60)]
            assert emitted["b"] == [None, None]

    def test_same_name_channels_keep_separate_state(self):
        """Test two channels named alike never share a flag."""
        a = InputChannel("pad", 0, 60)
        b = InputChannel("pad", 1, 62)
        translator = EdgeTranslator([a])
        events = [translator.poll(a, True), translator.poll(b, True), translator.poll(b, False)]
        assert events == [NoteOn(1, 60), NoteOn(1, 62), NoteOff(1, 62)]
        assert translator.is_active(a)
        assert not translator.is_active(b)
        assert translator.release_all([a, b]) == [NoteOff(1, 60)]

    def test_unregistered_channel_starts_inactive(self):
        translator = EdgeTranslator()
        channel = InputChannel("late", 3, 42, midi_channel=10)
        assert not translator.is_active(channel)
        assert translator.poll(channel, True) == NoteOn(10, 42)

    def test_release_all(self):
        a = InputChannel("a", 0, 60)
        b = InputChannel("b", 1, 64)
        translator = EdgeTranslator([a, b])
        translator.poll(a, True)
        assert translator.is_active(a)
        assert not translator.is_active(b)

        assert translator.release_all([a, b]) == [NoteOff(1, 60)]
        assert not translator.is_active(a)
        assert translator.release_all([a, b]) == []
        # Next press starts a fresh note
        assert translator.poll(a, True) == NoteOn(1, 60)


class TestTriggerApp:
    """Tests for the polling loop with mock hardware."""

    def setup_app(self, channels=None, with_display=True, count=2):
        if channels is None:
            channels = get_layout("percussion")
        port, mocks = create_mock_hardware_port(count, with_display=with_display)
        return TriggerApp(port, channels), mocks

    def test_press_and_release_send_midi(self):
        app, mocks = self.setup_app()
        inputs = mocks["inputs"]
        midi = mocks["midi_output"]

        assert app.update() == []
        inputs.simulate_press(0)
        assert app.update() == [NoteOn(10, 35)]
        assert app.update() == []
        inputs.simulate_release(0)
        assert app.update() == [NoteOff(10, 35)]

        assert midi.wire_bytes() == bytes([0x99, 35, 127, 0x89, 35, 0])
        assert inputs.update_calls == 4

    def test_events_reach_display(self):
        app, mocks = self.setup_app()
        mocks["inputs"].simulate_press(1)
        app.update()
        assert ("show_event", NoteOn(10, 38)) in mocks["display"].calls

    def test_works_without_display(self):
        app, mocks = self.setup_app(with_display=False)
        mocks["inputs"].simulate_press(0)
        app.start()
        app.update()
        app.cleanup()
        assert mocks["midi_output"].kinds() == ["note_on", "note_off"]

    def test_channels_polled_in_order(self):
        app, mocks = self.setup_app()
        mocks["inputs"].simulate_press(0)
        mocks["inputs"].simulate_press(1)
        assert app.update() == [NoteOn(10, 35), NoteOn(10, 38)]

    def test_knock_sensor_threshold(self):
        app, mocks = self.setup_app(channels=knock_layout(threshold=500))
        inputs = mocks["inputs"]

        inputs.simulate(1, 300)
        assert app.update() == []
        inputs.simulate(1, 800)
        assert app.update() == [NoteOn(10, 38)]
        inputs.simulate(1, 650)
        assert app.update() == []
        inputs.simulate(1, 500)
        assert app.update() == [NoteOff(10, 38)]

    def test_start_sends_program_changes_once(self):
        channels = [
            InputChannel("a", 0, 60, midi_channel=1, program=4),
            InputChannel("b", 1, 64, midi_channel=1, program=4),
            InputChannel("c", 2, 67, midi_channel=2, program=40),
        ]
        app, mocks = self.setup_app(channels=channels, count=3)
        app.start()
        app.start()
        assert mocks["midi_output"].events == [ProgramChange(1, 4), ProgramChange(2, 40)]
        assert mocks["display"].current_message == "ready"

    def test_cleanup_releases_held_notes(self):
        app, mocks = self.setup_app()
        mocks["inputs"].simulate_press(0)
        app.update()
        mocks["midi_output"].clear_events()

        app.cleanup()
        assert mocks["midi_output"].events == [NoteOff(10, 35)]
        assert ("clear",) in mocks["display"].calls

    def test_run_fixed_iterations(self):
        app, mocks = self.setup_app(channels=get_layout("button_notes"))
        sleeps = []
        mocks["inputs"].simulate_press(1)

        count = app.run(iterations=3, sleep=sleeps.append)

        assert count == 3
        assert sleeps == [0.01, 0.01, 0.01]
        # Program change, one note on, cleanup note off
        assert mocks["midi_output"].events == [
            ProgramChange(1, 0),
            NoteOn(1, 64),
            NoteOff(1, 64),
        ]

    def test_run_stops_on_keyboard_interrupt(self):
        app, mocks = self.setup_app()
        mocks["inputs"].simulate_press(0)

        def interrupt(_seconds):
            raise KeyboardInterrupt

        assert app.run(sleep=interrupt) == 1
        assert mocks["midi_output"].kinds() == ["note_on", "note_off"]

    def test_invalid_app_config(self):
        port, _ = create_mock_hardware_port()
        dup = [InputChannel("a", 0, 60), InputChannel("a", 1, 62)]
        assert raises(ValueError, TriggerApp, port, dup)
        assert raises(ValueError, TriggerApp, port, [], poll_interval_ms=0)

    def test_source_beyond_hardware_inputs(self):
        port, _ = create_mock_hardware_port(count=2)
        assert raises(ValueError, TriggerApp, port, [InputChannel("c", 2, 67)])
        assert TriggerApp(port, [InputChannel("b", 1, 64)]).channels[0].source == 1


class TestLayouts:
    """Tests for the ready-made layouts."""

    def test_layout_names(self):
        assert get_layout_names() == ["button_notes", "knock", "percussion"]

    def test_percussion_on_channel_10(self):
        for channel in get_layout("percussion"):
            assert channel.midi_channel == 10

    def test_knock_layout_has_analog_source(self):
        channels = get_layout("knock")
        assert channels[1].threshold == 500
        assert channels[1].source == 1
        assert not channels[0].is_analog

    def test_knock_threshold_must_be_reachable(self):
        assert raises(ValueError, knock_layout, 1023)
        assert raises(ValueError, knock_layout, 5000)
        assert raises(ValueError, knock_layout, -1)
        assert knock_layout(threshold=1022)[1].threshold == 1022

    def test_unknown_layout(self):
        assert raises(ValueError, get_layout, "theremin")


class TestHalProtocol:
    """Tests for the abstract HAL classes."""

    def test_abstract_methods(self):
        assert raises(NotImplementedError, InputsHAL().read, 0)
        assert raises(NotImplementedError, MidiOutputHAL().send, NoteOn(1, 60))
        assert raises(NotImplementedError, DisplayHAL().show_event, NoteOn(1, 60))

    def test_convenience_senders(self):
        midi = MockMidiOutputHAL()
        midi.send_note_on(10, 35)
        midi.send_note_off(10, 35)
        midi.send_program_change(1, 7)
        assert midi.events == [NoteOn(10, 35, 127), NoteOff(10, 35, 0), ProgramChange(1, 7)]


def run_tests():
    """Run all tests and report results."""
    test_classes = [TestMidiEvent, TestInputChannel, TestEdgeTranslator,
                    TestTriggerApp, TestLayouts, TestHalProtocol]
    passed = 0
    failed = 0

    for test_class in test_classes:
        instance = test_class()
        print("")
        print(test_class.__name__)
        print("-" * 40)

        for method_name in dir(instance):
            if method_name.startswith("test_"):
                try:
                    method = getattr(instance, method_name)
                    method()
                    print("  [OK] " + method_name)
                    passed += 1
                except AssertionError as e:
                    print("  [FAIL] " + method_name + ": " + str(e))
                    failed += 1
                except Exception as e:
                    print("  [ERROR] " + method_name + ": " + str(e))
                    failed += 1

    print("")
    print("=" * 40)
    print("Results: " + str(passed) + " passed, " + str(failed) + " failed")
    return failed == 0


if __name__ == "__main__":
    success = run_tests()
    sys.exit(0 if success else 1)
