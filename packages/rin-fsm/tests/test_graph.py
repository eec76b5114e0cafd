"""Tests for graph export."""
import io

from rin_fsm import DotRenderer, Edge, Graph, Guard, Node, StateMachine


def make_machine():
    return (
        StateMachine(
            "myApp",
            status=lambda *f: False,
            io=lambda *f: False,
            setpoint=lambda *f: False,
        )
        .add_state("idle")
        .add_state("run")
        .add_state("wait")
        .add_transition("run", "wait", status=["notzero", "notmotion"])
        .add_transition("wait", "run", status="motion", cond=lambda: True, cond_name="heavy")
        .add_transition("idle", "run", event="run", time=1.5)
        .add_transition("run", "idle", io=3, setpoint=[1, 2], cond=lambda: True)
        .add_transition("all", "idle", event="reset")
    )


class TestBuildGraph:
    def test_nodes_in_definition_order(self):
        graph = make_machine().graph()
        assert [n.ref for n in graph.nodes] == ["idle", "run", "wait"]
        assert [n.initial for n in graph.nodes] == [True, False, False]
        assert not any(n.current for n in graph.nodes)

    def test_current_marked_on_request(self):
        fsm = make_machine()
        fsm.set_state("wait")
        graph = fsm.graph(show_current=True)
        assert [n.current for n in graph.nodes] == [False, False, True]

    def test_every_transition_is_an_edge(self):
        graph = make_machine().graph()
        pairs = [(e.source, e.dest) for e in graph.edges]
        assert pairs == [
            ("idle", "run"),
            ("run", "wait"),
            ("run", "idle"),
            ("run", "idle"),
            ("wait", "run"),
            ("wait", "idle"),
        ]

    def test_guard_summaries(self):
        graph = make_machine().graph()
        by_name = {e.name: e for e in graph.edges}

        assert by_name["idle-run"].guards == (
            Guard("time", "t=1.5"),
            Guard("event", "run"),
        )
        assert by_name["wait-run"].guards == (
            Guard("cond", "heavy"),
            Guard("status", "motion"),
        )
        assert by_name["run-wait"].guards == (
            Guard("status", "notzero"),
            Guard("status", "notmotion"),
        )

    def test_flag_families_prefixed(self):
        graph = make_machine().graph()
        edge = next(e for e in graph.edges if e.name == "run-idle")
        assert edge.guards == (
            Guard("cond", "Cond"),
            Guard("io", "IO 3"),
            Guard("setpoint", "SP 1"),
            Guard("setpoint", "SP 2"),
        )

    def test_unguarded_edge(self):
        fsm = StateMachine("m").add_state("a").add_state("b").add_transition("a", "b")
        assert fsm.graph().edges == (Edge("a", "b", "a-b"),)

    def test_empty_machine(self):
        assert StateMachine("m").graph() == Graph("m", (), ())


class TestDotRenderer:
    def test_header_and_footer(self):
        text = DotRenderer().render(make_machine().graph())
        lines = text.splitlines()
        assert lines[0] == 'digraph "myApp" {'
        assert lines[1] == ' graph [label="myApp", labelloc=t, fontsize=20];'
        assert lines[-1] == "}"
        assert text.endswith("}\n")

    def test_initial_state_highlighted(self):
        text = DotRenderer().render(make_machine().graph())
        assert ' "idle" [label="idle" style=filled color="#F0E442" fontsize=14];' in text
        assert ' "run" [label="run" fontsize=14];' in text

    def test_current_state_labelled(self):
        text = DotRenderer().render(make_machine().graph(show_current=True))
        assert '"idle" [label="idle\\ncurrent" style=filled' in text

    def test_edge_labels_and_colours(self):
        text = DotRenderer().render(make_machine().graph())
        assert (
            '  "idle" -> "run" [color="#009E73:#D55E00" label="t=1.5\\nrun" fontsize=10];'
            in text
        )
        assert (
            '  "run" -> "wait" [color="#CC79A7" label="notzero\\nnotmotion" fontsize=10];'
            in text
        )

    def test_unguarded_edge(self):
        fsm = StateMachine("m").add_state("a").add_state("b").add_transition("a", "b")
        assert '  "a" -> "b";' in DotRenderer().render(fsm.graph())

    def test_quotes_escaped(self):
        fsm = StateMachine('say "hi"').add_state('a"b')
        text = DotRenderer().render(fsm.graph())
        assert 'digraph "say \\"hi\\"" {' in text
        assert '"a\\"b" [label="a\\"b"' in text

    def test_deterministic(self):
        r = DotRenderer()
        assert r.render(make_machine().graph()) == r.render(make_machine().graph())


class TestDump:
    def test_dump_to_stream(self):
        fsm = make_machine()
        out = io.StringIO()
        assert fsm.dump(out) is fsm
        assert out.getvalue() == DotRenderer().render(fsm.graph())

    def test_dump_to_path(self, tmp_path):
        fsm = make_machine()
        path = tmp_path / "machine.dot"
        fsm.dump(path, show_current=True)
        assert path.read_text(encoding="utf-8").startswith('digraph "myApp" {')
        assert "current" in path.read_text(encoding="utf-8")

    def test_dump_to_str_path(self, tmp_path):
        path = tmp_path / "m.dot"
        make_machine().dump(str(path))
        assert path.exists()

    def test_custom_renderer(self):
        class Names:
            def render(self, graph):
                return ",".join(n.label for n in graph.nodes)

        out = io.StringIO()
        make_machine().dump(out, renderer=Names())
        assert out.getvalue() == "idle,run,wait"

    def test_node_dataclass(self):
        assert Node("a", "A") == Node("a", "A", initial=False, current=False)
