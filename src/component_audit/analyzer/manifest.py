"""package.json reader for declared tracked-namespace dependencies."""
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List


DEPENDENCY_SECTIONS = ('dependencies', 'devDependencies', 'peerDependencies')


@dataclass(frozen=True)
class ProjectManifest:
    """Project metadata taken from package.json."""

    name: str
    version: str = ""
    dependencies: Dict[str, str] = field(default_factory=dict)
    found: bool = True

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'version': self.version,
            'dependencies': dict(self.dependencies),
        }


# Sentinel substituted whenever the manifest is missing or unreadable
UNKNOWN_PROJECT = ProjectManifest(name="unknown", found=False)


def namespaces_for(libraries: Iterable[str]) -> List[str]:
    """Derive namespace scopes from library identifiers.

    `@vetsource/kibble` -> `@vetsource`; unscoped names are their own namespace.
    """
    namespaces: List[str] = []
    for library in libraries:
        if library.startswith('@') and '/' in library:
            scope = library.split('/', 1)[0]
        else:
            scope = library
        if scope not in namespaces:
            namespaces.append(scope)
    return namespaces


def _in_namespace(package: str, namespaces: Iterable[str]) -> bool:
    for namespace in namespaces:
        if package == namespace or package.startswith(f'{namespace}/'):
            return True
    return False


def read_manifest(project_root: str | Path, namespaces: Iterable[str]) -> ProjectManifest:
    """Read package.json and keep dependencies belonging to the given namespaces.

    Args:
        project_root: Directory holding package.json
        namespaces: Scopes such as '@vetsource' or bare package names

    Returns:
        ProjectManifest, or UNKNOWN_PROJECT if the file is missing or malformed
    """
    package_json = Path(project_root) / 'package.json'
    namespaces = list(namespaces)

    try:
        with open(package_json, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return UNKNOWN_PROJECT

    if not isinstance(data, dict):
        return UNKNOWN_PROJECT

    declared: Dict[str, str] = {}
    for section in DEPENDENCY_SECTIONS:
        entries = data.get(section)
        if not isinstance(entries, dict):
            continue
        for package, spec in entries.items():
            # First section wins for packages listed twice
            if _in_namespace(package, namespaces) and package not in declared:
                declared[package] = str(spec)

    return ProjectManifest(
        name=str(data.get('name') or UNKNOWN_PROJECT.name),
        version=str(data.get('version') or ''),
        dependencies=declared,
    )
