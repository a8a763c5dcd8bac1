"""End-to-end generation into a temporary output tree."""

import re

import pytest

from rtdiagram import generate
from rtdiagram.config import RtDiagramConfig
from rtdiagram.diagrams import DiagramGenerator, DiagramKind
from rtdiagram.errors import ConfigurationError
from rtdiagram.models import Capsule, Model, Package, Port
from rtdiagram.naming import resolve_names
from rtdiagram.output import MemoryDocumentSink


@pytest.mark.integration
class TestGenerate:
    """Test the generate() entry point."""

    def test_empty_model_generates_nothing(self, empty_model, tmp_path):
        """Test that a model without capsules yields False and no files."""
        out = tmp_path / "out"

        assert generate(empty_model, out) is False
        assert out.is_dir()
        assert list(out.rglob("*")) == []

    def test_output_tree(self, sample_model, tmp_path):
        """Test document placement mirrors package and capsule nesting."""
        assert generate(sample_model, tmp_path) is True

        files = sorted(p.relative_to(tmp_path).as_posix() for p in tmp_path.rglob("*.puml"))
        assert files == [
            "Demo/Controller/composition.puml",
            "Demo/Controller/statemachine.puml",
            "Demo/Devices/Sensor/composition.puml",
            "class.puml",
        ]

    def test_creates_missing_parents(self, sample_model, tmp_path):
        out = tmp_path / "deep" / "er" / "out"
        assert generate(sample_model, out) is True
        assert (out / "class.puml").is_file()

    def test_unusable_output_location(self, sample_model, tmp_path):
        """Test that a file in place of the output directory is fatal."""
        blocked = tmp_path / "blocked"
        blocked.write_text("file")

        with pytest.raises(ConfigurationError):
            generate(sample_model, blocked)

    def test_blocked_scope_fails_before_any_document(self, sample_model, tmp_path):
        """Test that an unusable package directory aborts with nothing written."""
        (tmp_path / "Demo").write_text("file in place of a package directory")

        with pytest.raises(ConfigurationError):
            generate(sample_model, tmp_path)

        assert not (tmp_path / "class.puml").exists()
        assert list(tmp_path.rglob("*.puml")) == []

    def test_blocked_capsule_scope_fails_before_any_document(self, sample_model, tmp_path):
        (tmp_path / "Demo" / "Devices").mkdir(parents=True)
        (tmp_path / "Demo" / "Devices" / "Sensor").write_text("file")
        generator = DiagramGenerator(sample_model, tmp_path)

        with pytest.raises(ConfigurationError):
            generator.generate()

        assert generator.documents == []
        assert generator.scopes.depth == 0
        assert list(tmp_path.rglob("*.puml")) == []

    def test_tokens_stable_across_documents(self, sample_model, tmp_path):
        """Test that a port alias is identical everywhere it is referenced."""
        generate(sample_model, tmp_path)
        sensor = sample_model.root.packages[0].capsules[0]
        token = resolve_names(sample_model)[sensor.ports[0]]

        controller_doc = (tmp_path / "Demo" / "Controller" / "composition.puml").read_text()
        sensor_doc = (tmp_path / "Demo" / "Devices" / "Sensor" / "composition.puml").read_text()

        assert f'port "reading" as {token}' in sensor_doc
        assert f'port "reading" as {token}' in controller_doc
        assert f"Demo__Controller__status -u0)- {token}" in controller_doc

    def test_composition_document(self, sample_model, tmp_path):
        generate(sample_model, tmp_path)
        text = (tmp_path / "Demo" / "Controller" / "composition.puml").read_text()

        assert text.startswith("@startuml Controller-composition\n")
        assert text.endswith("@enduml\n")
        assert "\tcomponent primary {" in text
        assert "\tcomponent backup #lightgray {" in text
        assert "\tcomponent probe #line.dashed {" in text
        assert '"log"' not in text
        assert len(re.findall(r"-u0\)-", text)) == 2

    def test_state_machine_document(self, sample_model, tmp_path):
        generate(sample_model, tmp_path)
        lines = (tmp_path / "Demo" / "Controller" / "statemachine.puml").read_text().splitlines()

        assert lines[0] == "@startuml Controller-statemachine"
        assert 'state "Idle" as Demo__Controller__Idle' in lines
        assert 'state "Running" as Demo__Controller__Running {' in lines
        assert '\tstate "Sampling" as Demo__Controller__Running__Sampling' in lines
        assert "\t[*] --> Demo__Controller__Running__Sampling" in lines
        assert "state Demo__Controller__decide <<choice>>" in lines
        assert "[*] --> Demo__Controller__Idle" in lines
        assert "Demo__Controller__Idle --> Demo__Controller__Running : start" in lines
        assert "Demo__Controller__Running --> Demo__Controller__decide : stop,abort" in lines
        assert "Demo__Controller__decide --> Demo__Controller__Idle" in lines
        assert "Demo__Controller__Idle --> [H*] : resume" in lines
        assert not any("merge" in line for line in lines)
        assert not any("ready" in line for line in lines)

    def test_guards_with_config(self, sample_model, tmp_path):
        config = RtDiagramConfig(diagrams={"emitGuards": True})
        generate(sample_model, tmp_path, config=config)
        text = (tmp_path / "Demo" / "Controller" / "statemachine.puml").read_text()

        assert "Demo__Controller__decide --> Demo__Controller__Idle : [ready]" in text

    def test_capsule_without_state_machine(self, tmp_path):
        model = Model(name="M", root=Package("M", capsules=[Capsule("Plain", ports=[Port("p")])]))

        assert generate(model, tmp_path) is True
        assert (tmp_path / "M" / "Plain" / "composition.puml").is_file()
        assert not (tmp_path / "M" / "Plain" / "statemachine.puml").exists()

    def test_imports_written_before_model(self, tmp_path):
        library = Model(name="Lib", root=Package("Lib", capsules=[Capsule("Driver")]))
        model = Model(name="App", root=Package("App", capsules=[Capsule("Main")]), imports=[library])
        sink = MemoryDocumentSink()

        generate(model, tmp_path, sink=sink)

        assert [p.relative_to(tmp_path).as_posix() for p in sink.written] == [
            "class.puml",
            "Lib/Driver/composition.puml",
            "App/Main/composition.puml",
        ]

    def test_regeneration_is_deterministic(self, sample_model, tmp_path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        generate(sample_model, first)
        generate(sample_model, second)

        for path in first.rglob("*.puml"):
            assert path.read_text() == (second / path.relative_to(first)).read_text()

    def test_external_name_lookup(self, tmp_path):
        """Test that a caller-supplied lookup is used verbatim."""
        p1 = Port("p1")
        model = Model(name="M", root=Package("M", capsules=[Capsule("Foo", ports=[p1])]))
        generate(model, tmp_path, names={p1: "custom_alias"})

        assert 'port "p1" as custom_alias' in (tmp_path / "M" / "Foo" / "composition.puml").read_text()


@pytest.mark.integration
class TestDiagramGenerator:
    """Test generator bookkeeping."""

    def test_documents_recorded(self, sample_model, tmp_path):
        generator = DiagramGenerator(sample_model, tmp_path)
        generator.generate()

        kinds = [document.kind for document in generator.documents]
        assert kinds == [
            DiagramKind.CLASS,
            DiagramKind.COMPOSITION,
            DiagramKind.COMPOSITION,
            DiagramKind.STATE_MACHINE,
        ]
        assert generator.scopes.depth == 0

    def test_custom_file_names(self, sample_model, tmp_path):
        config = RtDiagramConfig(output={"classDiagramFile": "model.puml", "compositionFile": "parts.puml"})
        DiagramGenerator(sample_model, tmp_path, config=config).generate()

        assert (tmp_path / "model.puml").is_file()
        assert (tmp_path / "Demo" / "Controller" / "parts.puml").is_file()
