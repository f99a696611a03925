"""Render code fragments to source text through the two layout templates."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader

from ..logging import get_logger
from .fragments import CodeFragment, EnumFragment

_DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")


class ScriptRenderer:
    """Renders fragments with or without a namespace block.

    Output is a pure function of the fragment, so rendering the same fragment
    twice yields byte-identical text.
    """

    TEMPLATE = "script.cs.j2"
    NAMESPACED_TEMPLATE = "namespaced_script.cs.j2"

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)
        self.logger = get_logger("codegen.renderer")

    def render(self, fragment: CodeFragment) -> str:
        if isinstance(fragment, EnumFragment) and not fragment.entries:
            self.logger.warning("Enum %s has no members.", fragment.name)

        template_name = self.NAMESPACED_TEMPLATE if fragment.namespace else self.TEMPLATE
        template = self._env.get_template(template_name)
        context: Dict[str, object] = {
            "imports": list(fragment.imports),
            "namespace": fragment.namespace,
            "attributes": fragment.attributes.render(),
            "declaration": fragment.declaration(),
            "body": fragment.body(),
        }
        return template.render(**context).strip() + "\n"

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(_DEFAULT_TEMPLATES_DIR)
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


__all__ = ["ScriptRenderer"]
