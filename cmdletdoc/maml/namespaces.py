"""MAML namespaces and qualified-name helpers."""

from __future__ import annotations

from typing import Dict
from xml.etree import ElementTree as ET

MSH_NS = "http://msh"
MAML_NS = "http://schemas.microsoft.com/maml/2004/10"
COMMAND_NS = "http://schemas.microsoft.com/maml/dev/command/2004/10"
DEV_NS = "http://schemas.microsoft.com/maml/dev/2004/10"

PREFIXES: Dict[str, str] = {
    "maml": MAML_NS,
    "command": COMMAND_NS,
    "dev": DEV_NS,
}

# msh is serialized as the default namespace; it stays out of PREFIXES so that
# unprefixed names in fragment lookups keep matching unqualified doc elements.
ET.register_namespace("", MSH_NS)
for _prefix, _uri in PREFIXES.items():
    ET.register_namespace(_prefix, _uri)


def msh(tag: str) -> str:
    return f"{{{MSH_NS}}}{tag}"


def maml(tag: str) -> str:
    return f"{{{MAML_NS}}}{tag}"


def command(tag: str) -> str:
    return f"{{{COMMAND_NS}}}{tag}"


def dev(tag: str) -> str:
    return f"{{{DEV_NS}}}{tag}"


__all__ = [
    "COMMAND_NS",
    "DEV_NS",
    "MAML_NS",
    "MSH_NS",
    "PREFIXES",
    "command",
    "dev",
    "maml",
    "msh",
]
