"""Generation pipeline: load a command module and its doc comments, write MAML help."""

from __future__ import annotations

import importlib.util
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import FrozenSet, Iterable, List, Optional

from .comments import XmlDocIndex, build_comment_reader
from .diagnostics import WarningLog
from .domain import Command
from .domain.reflection import full_type_name
from .errors import EngineError, ExitCode
from .logging import get_logger
from .maml.assembler import HelpDocumentAssembler, write_document
from .markers import Cmdlet, cmdlet_marker


def default_output_path(module_path: Path) -> Path:
    return module_path.with_name(module_path.name + "-Help.xml")


def default_doc_comments_path(module_path: Path) -> Path:
    return module_path.with_suffix(".xml")


@dataclass
class Options:
    """Inputs for one generation run.

    Output and doc comment paths default to ``<module>.py-Help.xml`` and
    ``<module>.xml`` beside the module.
    """

    module_path: Path
    output_path: Optional[Path] = None
    doc_comments_path: Optional[Path] = None
    strict: bool = False
    excluded_parameter_sets: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        self.module_path = Path(self.module_path).expanduser().resolve()
        if self.output_path is None:
            self.output_path = default_output_path(self.module_path)
        else:
            self.output_path = Path(self.output_path).expanduser().resolve()
        if self.doc_comments_path is None:
            self.doc_comments_path = default_doc_comments_path(self.module_path)
        else:
            self.doc_comments_path = Path(self.doc_comments_path).expanduser().resolve()
        self.excluded_parameter_sets = frozenset(self.excluded_parameter_sets)


class Engine:
    """Runs the help generation pipeline and maps failures to exit codes."""

    def __init__(self) -> None:
        self.logger = get_logger("engine")

    def generate_help(self, options: Options) -> ExitCode:
        try:
            self._generate(options)
        except EngineError as exc:
            self.logger.error("%s", exc.message)
            return exc.exit_code
        except ExceptionGroup as group:
            self.logger.error("%s", group.message)
            for exc in group.exceptions:
                self.logger.error("%s", exc, exc_info=exc)
            return ExitCode.UNHANDLED_EXCEPTION
        except Exception as exc:
            self.logger.exception("Unhandled failure: %s", exc)
            return ExitCode.UNHANDLED_EXCEPTION
        return ExitCode.SUCCESS

    def _generate(self, options: Options) -> None:
        self.logger.info("Generating help for %s", options.module_path)
        module = load_module(options.module_path)
        index = load_doc_comments(options.doc_comments_path)

        commands = discover_commands(module)
        for command in commands:
            self.logger.debug("Found cmdlet %s (%s)", command.name, full_type_name(command.cmdlet_type))

        warnings = WarningLog()
        reader = build_comment_reader(index, warnings.report)
        assembler = HelpDocumentAssembler(reader, warnings.report, options.excluded_parameter_sets)
        document = assembler.build(commands)
        write_document(document, options.output_path)
        self.logger.info("Wrote %d cmdlet(s) to %s", len(commands), options.output_path)

        reported = warnings.log_report(self.logger, module.__name__)
        if options.strict and reported:
            raise EngineError(
                ExitCode.WARNINGS_AS_ERRORS,
                f"Warnings were reported for {reported} member(s) and warnings are treated as errors",
            )


def load_module(path: Path) -> ModuleType:
    """Import a command module from a ``.py`` file under its file stem."""
    if not path.is_file():
        raise EngineError(ExitCode.MODULE_NOT_FOUND, f"Module file not found: {path}")
    name = path.stem
    previous = sys.modules.get(name)
    directory = str(path.parent)
    added_to_path = directory not in sys.path
    try:
        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"No loader for {path}")
        module = importlib.util.module_from_spec(spec)
        if added_to_path:
            sys.path.insert(0, directory)
        sys.modules[name] = module
        spec.loader.exec_module(module)
    except Exception as exc:
        if previous is None:
            sys.modules.pop(name, None)
        else:
            sys.modules[name] = previous
        if added_to_path and directory in sys.path:
            sys.path.remove(directory)
        raise EngineError(
            ExitCode.MODULE_LOAD_ERROR, f"Failed to load module from file: {path}: {exc}"
        ) from exc
    return module


def load_doc_comments(path: Path) -> XmlDocIndex:
    if not path.is_file():
        raise EngineError(ExitCode.DOC_COMMENTS_NOT_FOUND, f"Doc comments file not found: {path}")
    try:
        return XmlDocIndex.load(path)
    except Exception as exc:
        raise EngineError(
            ExitCode.DOC_COMMENTS_LOAD_ERROR, f"Failed to load doc comments from file: {path}: {exc}"
        ) from exc


def get_cmdlet_types(module: ModuleType) -> List[type]:
    """Public cmdlet classes defined in ``module``, sorted by full name."""
    found = [
        value
        for name, value in vars(module).items()
        if not name.startswith("_")
        and isinstance(value, type)
        and value.__module__ == module.__name__
        and issubclass(value, Cmdlet)
        and cmdlet_marker(value) is not None
    ]
    return sorted(found, key=full_type_name)


def discover_commands(module: ModuleType) -> List[Command]:
    """Build commands for every cmdlet type, resolving parameters eagerly.

    Types whose parameters cannot be reflected are collected and raised
    together as an ``ExceptionGroup``.
    """
    return _build_commands(get_cmdlet_types(module))


def _build_commands(cmdlet_types: Iterable[type]) -> List[Command]:
    commands: List[Command] = []
    errors: List[Exception] = []
    for cmdlet_type in cmdlet_types:
        try:
            command = Command(cmdlet_type)
            command.parameters
        except Exception as exc:
            exc.add_note(f"while loading {full_type_name(cmdlet_type)}")
            errors.append(exc)
            continue
        commands.append(command)
    if errors:
        raise ExceptionGroup("Failed to load cmdlet types", errors)
    return commands


__all__ = [
    "Engine",
    "Options",
    "default_doc_comments_path",
    "default_output_path",
    "discover_commands",
    "get_cmdlet_types",
    "load_doc_comments",
    "load_module",
]
