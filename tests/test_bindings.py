"""Tests for BindingExtractor: tracked-library filtering and alias tables."""
import pytest

from component_audit.analyzer.bindings import BindingExtractor
from component_audit.analyzer.models import ImportEvent, Origin, SpecifierKind

from conftest import KIBBLE, MUI, TRACKED


@pytest.fixture
def extractor():
    return BindingExtractor(TRACKED)


class TestNamedImports:
    """Named specifiers from tracked libraries become bindings and events."""

    def test_plain_named_import(self, extractor, parse):
        root = parse("import { Button } from '@vetsource/kibble';")

        bindings, events = extractor.extract(root, 'A.tsx')

        assert bindings == {'Button': Origin(KIBBLE, 'Button')}
        assert events == [ImportEvent(KIBBLE, 'Button', 'A.tsx')]

    def test_alias_binds_local_name_to_exported_name(self, extractor, parse):
        root = parse("import { Button as MyButton } from '@vetsource/kibble';")

        bindings, events = extractor.extract(root, 'D.tsx')

        assert bindings == {'MyButton': Origin(KIBBLE, 'Button')}
        assert 'Button' not in bindings
        assert events[0].component == 'Button'

    def test_multiple_specifiers_and_libraries(self, extractor, parse):
        root = parse(
            "import { Button, Card } from '@vetsource/kibble';\n"
            "import { TextField as Input } from \"@mui/material\";\n"
        )

        bindings, events = extractor.extract(root, 'A.tsx')

        assert bindings == {
            'Button': Origin(KIBBLE, 'Button'),
            'Card': Origin(KIBBLE, 'Card'),
            'Input': Origin(MUI, 'TextField'),
        }
        assert [(e.library, e.component) for e in events] == [
            (KIBBLE, 'Button'), (KIBBLE, 'Card'), (MUI, 'TextField'),
        ]

    def test_duplicate_imports_each_count(self, extractor, parse):
        root = parse(
            "import { Button } from '@vetsource/kibble';\n"
            "import { Button as Other } from '@vetsource/kibble';\n"
        )

        bindings, events = extractor.extract(root, 'A.tsx')

        assert len(events) == 2
        assert bindings == {
            'Button': Origin(KIBBLE, 'Button'),
            'Other': Origin(KIBBLE, 'Button'),
        }

    def test_later_binding_wins(self, extractor, parse):
        root = parse(
            "import { Button as Action } from '@vetsource/kibble';\n"
            "import { Fab as Action } from '@mui/material';\n"
        )

        bindings, _ = extractor.extract(root, 'A.tsx')

        assert bindings['Action'] == Origin(MUI, 'Fab')

    def test_type_only_import_is_named(self, extractor, parse):
        root = parse("import type { ButtonProps } from '@vetsource/kibble';", 'types.ts')

        bindings, events = extractor.extract(root, 'types.ts')

        assert bindings == {'ButtonProps': Origin(KIBBLE, 'ButtonProps')}
        assert len(events) == 1


class TestIgnoredImports:
    """Everything that is not a named import from a tracked library is invisible."""

    def test_untracked_library_is_skipped(self, extractor, parse):
        root = parse("import { Button } from 'legacy-ui';")

        bindings, events = extractor.extract(root, 'A.tsx')

        assert bindings == {}
        assert events == []

    def test_subpath_of_tracked_library_is_not_tracked(self, extractor, parse):
        root = parse("import { Button } from '@mui/material/Button';")

        _, events = extractor.extract(root, 'A.tsx')

        assert events == []

    def test_default_import_ignored(self, extractor, parse):
        root = parse("import Kibble from '@vetsource/kibble';")

        bindings, events = extractor.extract(root, 'A.tsx')

        assert bindings == {}
        assert events == []

    def test_namespace_import_ignored(self, extractor, parse):
        root = parse("import * as Kibble from '@vetsource/kibble';")

        bindings, events = extractor.extract(root, 'A.tsx')

        assert bindings == {}
        assert events == []

    def test_default_plus_named_keeps_named_only(self, extractor, parse):
        root = parse("import Kibble, { Card } from '@vetsource/kibble';")

        bindings, events = extractor.extract(root, 'A.tsx')

        assert bindings == {'Card': Origin(KIBBLE, 'Card')}
        assert len(events) == 1

    def test_side_effect_import(self, extractor, parse):
        root = parse("import '@vetsource/kibble';")

        bindings, events = extractor.extract(root, 'A.tsx')

        assert bindings == {}
        assert events == []


class TestSpecifierVariants:
    """iter_import_declarations exposes the tagged specifier variant."""

    def test_kinds(self, extractor, parse):
        root = parse(
            "import Default, { Named as Alias } from '@vetsource/kibble';\n"
            "import * as Ns from 'other';\n"
        )

        declarations = list(extractor.iter_import_declarations(root))

        assert [source for source, _ in declarations] == [KIBBLE, 'other']
        first = declarations[0][1]
        assert [(s.kind, s.local_name, s.imported_name) for s in first] == [
            (SpecifierKind.DEFAULT, 'Default', None),
            (SpecifierKind.NAMED, 'Alias', 'Named'),
        ]
        assert declarations[1][1][0].kind is SpecifierKind.NAMESPACE
        assert declarations[1][1][0].local_name == 'Ns'
