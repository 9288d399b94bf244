from typing import Dict, Iterable, List, Optional, Tuple

from tree_sitter import Node

from .models import ImportEvent, ImportSpecifier, Origin, SpecifierKind


def node_text(node: Node) -> str:
    return node.text.decode('utf-8')


def strip_quotes(text: str) -> str:
    return text.strip('"\'`')


class BindingExtractor:
    """Builds the file-local alias table for imports from tracked libraries."""

    def __init__(self, tracked_libraries: Iterable[str]):
        self.tracked_libraries = tuple(dict.fromkeys(tracked_libraries))

    def extract(self, root_node: Node, file_path: str) -> Tuple[Dict[str, Origin], List[ImportEvent]]:
        """
        Walks a Tree-sitter root node and maps local names to their tracked origin.

        Returns the binding table (local name -> Origin) and one ImportEvent per
        named specifier whose declaration source is a tracked library.
        """
        bindings: Dict[str, Origin] = {}
        events: List[ImportEvent] = []

        for library, specifiers in self.iter_import_declarations(root_node):
            if library not in self.tracked_libraries:
                continue
            for specifier in specifiers:
                # Default and namespace imports are out of scope, not malformed
                if specifier.kind is not SpecifierKind.NAMED:
                    continue
                events.append(ImportEvent(library, specifier.imported_name, file_path))
                # Re-import or shadowing: last binding wins
                bindings[specifier.local_name] = Origin(library, specifier.imported_name)

        return bindings, events

    def iter_import_declarations(self, root_node: Node):
        """Yield (source module, [ImportSpecifier]) for every ESM import in source order."""
        stack = [root_node]

        while stack:
            node = stack.pop()

            if node.type == 'import_statement':
                source_node = node.child_by_field_name('source')
                if source_node is None:
                    # import x = require('mod')
                    continue
                yield strip_quotes(node_text(source_node)), self._specifiers(node)
                continue

            stack.extend(reversed(node.named_children))

    def _specifiers(self, import_node: Node) -> List[ImportSpecifier]:
        clause = _child_of_type(import_node, 'import_clause')
        if clause is None:
            # Side-effect import: import 'mod'
            return []

        specifiers: List[ImportSpecifier] = []
        for child in clause.named_children:
            # import x from 'mod'
            if child.type == 'identifier':
                specifiers.append(ImportSpecifier(SpecifierKind.DEFAULT, node_text(child)))

            # import * as ns from 'mod'
            elif child.type == 'namespace_import':
                ns_name = _child_of_type(child, 'identifier')
                if ns_name is not None:
                    specifiers.append(ImportSpecifier(SpecifierKind.NAMESPACE, node_text(ns_name)))

            # import { x, y as z } from 'mod'
            elif child.type == 'named_imports':
                for specifier in child.named_children:
                    if specifier.type != 'import_specifier':
                        continue
                    name_node = specifier.child_by_field_name('name')
                    if name_node is None:
                        continue
                    alias_node = specifier.child_by_field_name('alias')
                    imported = strip_quotes(node_text(name_node))
                    local = node_text(alias_node) if alias_node is not None else imported
                    specifiers.append(ImportSpecifier(SpecifierKind.NAMED, local, imported))

        return specifiers


def _child_of_type(node: Node, node_type: str) -> Optional[Node]:
    for child in node.named_children:
        if child.type == node_type:
            return child
    return None
