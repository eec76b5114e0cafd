"""The capture-weight state machine."""
from __future__ import annotations

from rin_device import Device
from rin_fsm import StateMachine

from game.scale import Scale


def build_machine(
    device: Device, scale: Scale, captures: list[float], trace: bool = False
) -> StateMachine:
    """idle -> run on F1; run -> wait once a load settles; back to run when it moves.

    Every settle captures the weight. F2 resets from any state.
    """

    def captured(previous: str | None) -> None:
        captures.append(scale.weight)
        device.display.write("bottomLeft", f"CAP {scale.weight:6.1f}")

    def show_ready(previous: str | None) -> None:
        device.display.write("bottomLeft", "READY")

    return (
        device.state_machine("myAppFSM", show_state=True, trace=trace)
        .add_state("idle", enter=show_ready)
        .add_state("run")
        .add_state("wait", short="HOLD")
        .add_transition(
            "run", "wait", status=["notzero", "notmotion"], activate=captured
        )
        .add_transition("wait", "run", status="motion")
        .add_transition("idle", "run", event="run")
        .add_transition("all", "idle", event="reset")
    )
