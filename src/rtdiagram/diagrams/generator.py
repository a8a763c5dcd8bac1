"""Depth-first diagram generation over a capsule model."""

import logging
from pathlib import Path
from typing import Any, Mapping

from rtdiagram.config import RtDiagramConfig
from rtdiagram.errors import ConfigurationError
from rtdiagram.models.flatten import flatten
from rtdiagram.models.model import Capsule, Model, Package
from rtdiagram.naming import resolve_names
from rtdiagram.output.scope import ScopeTracker
from rtdiagram.output.sink import DocumentSink, FileDocumentSink

from .framework import DiagramRenderer
from .models import DiagramDocument, DiagramKind
from .plantuml import PlantUMLRenderer
from .reflow import reflow

logger = logging.getLogger(__name__)


def prepare_output_dir(output_dir: str | Path) -> Path:
    """Create the output directory and its parents.

    Raises:
        ConfigurationError: If the directory cannot be created or is a file
    """
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Error creating output directory {output_dir.absolute()}: {e}") from e

    if not output_dir.is_dir():
        raise ConfigurationError(f"Output location {output_dir.absolute()} is not a directory")
    return output_dir


class DiagramGenerator:
    """Walk a model and write one document per diagram.

    Layout of the output tree:

        <out>/class.puml
        <out>/<package>/.../<capsule>/composition.puml
        <out>/<package>/.../<capsule>/statemachine.puml

    Imported models are walked first, each rooted at ``<out>``.
    """

    def __init__(
        self,
        model: Model,
        output_dir: str | Path,
        names: Mapping[Any, str] | None = None,
        config: RtDiagramConfig | None = None,
        sink: DocumentSink | None = None,
        renderer: DiagramRenderer | None = None,
    ):
        self.model = model
        self.config = config or RtDiagramConfig()
        self.output_dir = prepare_output_dir(output_dir)
        self.names = names if names is not None else resolve_names(model)
        self.renderer = renderer or PlantUMLRenderer(self.names, self.config.diagrams)
        self.sink = sink or FileDocumentSink()
        self.scopes = ScopeTracker(self.output_dir)
        self.documents: list[DiagramDocument] = []

    def generate(self) -> bool:
        """Generate every document for the model.

        Returns:
            False if the model has no instantiable structural content and
            nothing was written, True otherwise
        """
        slots = flatten(self.model)
        if not slots:
            logger.info(f"Model {self.model.name} has no capsules; nothing to generate")
            return False

        logger.info(f"Generating {self.renderer.format_name} diagrams for {self.model.name} "
                    f"({len(slots)} instance slots) into {self.output_dir}")

        self._prepare_model(self.model)
        self._write(
            DiagramKind.CLASS,
            self.model.name,
            self.config.output.class_diagram_file,
            self.renderer.render_class_diagram(self.model),
        )
        self._generate_model(self.model)

        logger.info(f"Generated {len(self.documents)} documents")
        return True

    def _prepare_model(self, model: Model) -> None:
        """Create every package and capsule directory before writing anything."""
        for imported in model.imports:
            self._prepare_model(imported)
        self._prepare_package(model.root)

    def _prepare_package(self, package: Package) -> None:
        with self.scopes.scope(package.name):
            for nested in package.packages:
                self._prepare_package(nested)
            for capsule in package.capsules:
                with self.scopes.scope(capsule.name):
                    pass

    def _generate_model(self, model: Model) -> None:
        for imported in model.imports:
            self._generate_model(imported)
        self._generate_package(model.root)

    def _generate_package(self, package: Package) -> None:
        with self.scopes.scope(package.name):
            for nested in package.packages:
                self._generate_package(nested)
            for capsule in package.capsules:
                self._generate_capsule(capsule)

    def _generate_capsule(self, capsule: Capsule) -> None:
        with self.scopes.scope(capsule.name):
            self._write(
                DiagramKind.COMPOSITION,
                f"{capsule.name}-composition",
                self.config.output.composition_file,
                self.renderer.render_composition(capsule),
            )
            if capsule.state_machine is not None:
                self._write(
                    DiagramKind.STATE_MACHINE,
                    f"{capsule.name}-statemachine",
                    self.config.output.state_machine_file,
                    self.renderer.render_state_machine(capsule),
                )

    def _write(self, kind: DiagramKind, title: str, file_name: str, source: str) -> None:
        content = reflow(source, self.config.diagrams.indent)
        path = self.sink.write(self.scopes.current, file_name, content)
        self.documents.append(DiagramDocument(kind=kind, title=title, path=path))


def generate(
    model: Model,
    output_dir: str | Path,
    names: Mapping[Any, str] | None = None,
    config: RtDiagramConfig | None = None,
    sink: DocumentSink | None = None,
) -> bool:
    """Generate all diagrams for a model into ``output_dir``.

    Args:
        model: Model to render
        output_dir: Root of the output tree, created if absent
        names: Element-to-token lookup; resolved from the model when omitted
        config: Generation settings; defaults when omitted
        sink: Destination for documents; the filesystem when omitted

    Returns:
        False if the model has no capsules, True otherwise

    Raises:
        ConfigurationError: If the output directory cannot be used
        ReflowError: If an assembled document has unbalanced braces
    """
    return DiagramGenerator(model, output_dir, names=names, config=config, sink=sink).generate()
