"""Tree-sitter parser for JavaScript/TypeScript sources."""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from tree_sitter import Language, Node, Parser, Tree
import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript

from ..errors import ParseFailure, ReadFailure


@lru_cache(maxsize=None)
def _load_language(grammar: str) -> Language:
    """Load a grammar once per process. Language objects are immutable."""
    if grammar == 'javascript':
        return Language(tsjavascript.language())
    if grammar == 'typescript':
        return Language(tstypescript.language_typescript())
    if grammar == 'tsx':
        return Language(tstypescript.language_tsx())
    raise ValueError(f"Unsupported grammar: {grammar}")


def _first_error(node: Node) -> Optional[Node]:
    """Return the first ERROR or MISSING node in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == 'ERROR' or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


class SourceParser:
    """Parser for one grammar. Not shared between threads."""

    SUPPORTED_EXTENSIONS = {
        '.js': 'javascript',
        '.jsx': 'javascript',
        '.mjs': 'javascript',
        '.cjs': 'javascript',
        '.ts': 'typescript',
        '.mts': 'typescript',
        '.cts': 'typescript',
        '.tsx': 'tsx',
    }

    def __init__(self, grammar: str):
        """Initialize parser for given grammar (javascript, typescript, tsx).

        Raises:
            ValueError: If grammar is not supported
        """
        self.grammar = grammar
        self.parser = Parser(_load_language(grammar))

    def parse_source(self, source_code: bytes, file_path: str | Path = "<source>") -> Tree:
        """Parse source bytes.

        Tree-sitter always produces a tree; a tree containing error nodes is
        reported as a ParseFailure so broken files contribute nothing.

        Raises:
            ParseFailure: If the source has syntax errors
        """
        tree = self.parser.parse(source_code)
        root = tree.root_node
        if root.has_error:
            error_node = _first_error(root)
            if error_node is None:
                raise ParseFailure(file_path, "Syntax error")
            row, column = error_node.start_point
            label = f"Missing {error_node.type}" if error_node.is_missing else "Unexpected token"
            raise ParseFailure(file_path, label, line=row + 1, column=column + 1)
        return tree

    def parse_file(self, file_path: str | Path) -> Tree:
        """Read and parse a file.

        Raises:
            ReadFailure: If the file cannot be read or is not valid UTF-8
            ParseFailure: If the source has syntax errors
        """
        file_path = Path(file_path)
        try:
            source_code = file_path.read_bytes()
            source_code.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ReadFailure(file_path, f"Not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise ReadFailure(file_path, e.strerror or str(e)) from e
        return self.parse_source(source_code, file_path)

    @classmethod
    def from_file_extension(cls, file_path: str | Path) -> Optional['SourceParser']:
        """Create parser based on file extension, or None if unsupported."""
        grammar = cls.SUPPORTED_EXTENSIONS.get(Path(file_path).suffix.lower())
        if grammar:
            return cls(grammar)
        return None
