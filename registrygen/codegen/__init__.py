"""Code fragment model and synthesis engine."""

from .fragments import AttributeList, ClassFragment, CodeFragment, EnumFragment, ImportList
from .renderer import ScriptRenderer
from .scripts import Script, save_script, save_script_if_missing

__all__ = [
    "AttributeList",
    "ClassFragment",
    "CodeFragment",
    "EnumFragment",
    "ImportList",
    "Script",
    "ScriptRenderer",
    "save_script",
    "save_script_if_missing",
]
