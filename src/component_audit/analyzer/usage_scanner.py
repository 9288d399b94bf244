from typing import Dict, List

from tree_sitter import Node

from .models import Origin, UsageEvent


class UsageScanner:
    """
    Finds JSX elements whose tag resolves through a file's binding table.

    Both `<Button>` and `<Button />` count as one opening tag. Member
    expression tags (`<Ns.Button>`), namespaced tags and fragments are skipped.
    """

    ELEMENT_TYPES = frozenset({'jsx_opening_element', 'jsx_self_closing_element'})

    def scan(self, root_node: Node, bindings: Dict[str, Origin], file_path: str) -> List[UsageEvent]:
        events: List[UsageEvent] = []
        if not bindings:
            return events

        stack = [root_node]
        while stack:
            node = stack.pop()

            if node.type in self.ELEMENT_TYPES:
                origin = self._resolve(node, bindings)
                if origin is not None:
                    events.append(UsageEvent(
                        library=origin.library,
                        component=origin.component,
                        file_path=file_path,
                        line=node.start_point[0] + 1,
                    ))

            # JSX nests inside attributes and expressions, keep descending
            stack.extend(reversed(node.named_children))

        return events

    def _resolve(self, element: Node, bindings: Dict[str, Origin]):
        name_node = element.child_by_field_name('name')
        if name_node is None or name_node.type != 'identifier':
            return None
        return bindings.get(name_node.text.decode('utf-8'))
