"""Integration tests: a machine ticked by the application loop."""
from rin import App, ManualClock
from rin_fsm import MachineConfig, StateMachine, make_fsm_system
from rin_schedule import Scheduler, make_scheduler_system


class TestFSMIntegration:
    def test_system_runs_machine_each_tick(self):
        now = ManualClock()
        app = App(tps=10, now=now)
        ticks = []
        fsm = (
            StateMachine("m", now=now)
            .add_state("a", run=lambda: ticks.append(now()))
            .add_state("b")
            .add_transition("a", "b", time=0.5)
        )
        app.add_loop(make_fsm_system(fsm))

        for _ in range(5):
            app.step()
            now.advance(0.125)
        assert fsm.get_state() == "b"
        assert ticks == [0.0, 0.125, 0.25, 0.375, 0.5]

    def test_timed_cycle_with_deferred_events(self):
        """A filling cycle: start, fill until full, settle, then back to idle."""
        now = ManualClock()
        app = App(tps=10, now=now)
        scheduler = Scheduler(now)
        weight = [0]
        log = []

        fsm = StateMachine("filler", MachineConfig(trace=True), now=now)
        fsm.add_state("idle", enter=lambda prev: log.append(("idle", prev)))
        fsm.add_state(
            "fill",
            run=lambda: weight.__setitem__(0, weight[0] + 10),
            enter=lambda prev: log.append(("fill", prev)),
        )
        fsm.add_state(
            "settle",
            # enter cannot raise events directly
            enter=lambda prev: scheduler.call_later(1.0, fsm.raise_event, "done"),
        )
        fsm.add_transition("idle", "fill", event="start")
        fsm.add_transition("fill", "settle", cond=lambda: weight[0] >= 50)
        fsm.add_transition(
            "settle", "idle", event="done", activate=lambda prev: weight.__setitem__(0, 0)
        )
        fsm.add_transition("all", "idle", event="abort")

        app.add_loop(make_fsm_system(fsm))
        app.add_loop(make_scheduler_system(scheduler))

        fsm.raise_event("start")
        for _ in range(6):
            app.step()
            now.advance(0.25)
        assert fsm.get_state() == "settle"
        assert weight[0] == 50

        for _ in range(4):
            app.step()
            now.advance(0.25)
        app.step()
        assert fsm.get_state() == "idle"
        assert weight[0] == 0
        assert log == [("idle", None), ("fill", "idle"), ("idle", "settle")]

    def test_abort_from_any_state(self):
        fsm = (
            StateMachine("m")
            .add_state("idle")
            .add_state("a")
            .add_state("b")
            .add_transition("idle", "a")
            .add_transition("a", "b", cond=lambda: False)
            .add_transition("all", "idle", event="abort")
        )
        app = App()
        app.add_loop(make_fsm_system(fsm))
        app.step()
        assert fsm.get_state() == "a"
        fsm.raise_event("abort")
        app.step()
        assert fsm.get_state() == "idle"

    def test_reset_after_several_transitions(self):
        order = []
        fsm = (
            StateMachine("m")
            .add_state("one", enter=lambda prev: order.append(("enter", "one")))
            .add_state("two")
            .add_state("three", leave=lambda nxt: order.append(("leave", "three")))
            .add_transition("one", "two")
            .add_transition("two", "three")
        )
        app = App()
        app.add_loop(make_fsm_system(fsm))
        app.run(3)
        assert fsm.get_state() == "three"

        order.clear()
        fsm.reset()
        assert fsm.get_state() == "one"
        assert order == [("leave", "three"), ("enter", "one")]
