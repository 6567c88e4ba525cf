"""Property-based tests for scanner and builder invariants using Hypothesis.

These tests check properties that must hold for any input, well-formed
or not, to catch edge cases the example-based suites miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from stategen.frontend.builder import Context, SymbolTableBuilder
from stategen.frontend.errors import LexError
from stategen.frontend.lexer import Scanner, Token


# Every punctuation character, both quotes, a backslash and some noise
GRAMMAR_ALPHABET = "(){}=*:^@.|%;#\"'\\ \n\tAbc1$~"


def location_of(item):
    return item.location


identifiers = st.from_regex(r"[A-Za-z][A-Za-z0-9]{0,5}", fullmatch=True)
literal_texts = st.text(alphabet="abc xyz019-", max_size=8)


def value_group(draw, name):
    values = draw(st.lists(literal_texts, max_size=4))
    prefix = draw(st.sampled_from(["", "*", ":", "*:"]))
    body = " ".join(f'"{value}"' for value in values)
    return f"{prefix}{name} ( {body} )", len(values)


def transition_block(draw, name):
    origins = draw(st.lists(st.one_of(identifiers, st.just("@")), unique=True, max_size=4))
    statements = []
    for origin in origins:
        mode = draw(st.sampled_from(["", "^ ", "% "]))
        target = draw(st.one_of(identifiers, st.just("@"), st.just(".")))
        statements.append(f"{origin} = {mode}{target};")
    return f"{name} {{ {' '.join(statements)} }}", 0


@st.composite
def well_formed_programs(draw):
    """Declarations of distinct objects, each a value group or a block.

    Returns (text, value_count) pairs, one per declaration.
    """
    names = draw(st.lists(identifiers, unique=True, max_size=6))
    program = []
    for name in names:
        if draw(st.booleans()):
            program.append(value_group(draw, name))
        else:
            program.append(transition_block(draw, name))
    return program


class TestScannerInvariants:
    """Invariants of the scanner's output."""

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_never_raises(self, source: str) -> None:
        """Any text scans to tokens and errors without an exception."""
        for item in Scanner(source, "<prop>"):
            assert isinstance(item, (Token, LexError))

    @given(st.text(alphabet=GRAMMAR_ALPHABET, max_size=300))
    @settings(max_examples=200)
    def test_positions_increase(self, source: str) -> None:
        """Items come out in source order with 1-based positions."""
        locations = [location_of(item) for item in Scanner(source, "<prop>")]
        for location in locations:
            assert location.line >= 1
            assert location.column >= 1
        keys = [(loc.line, loc.column) for loc in locations]
        assert keys == sorted(keys)
        assert len(set(keys)) == len(keys), "Two items start at the same position"

    @given(st.text(alphabet=GRAMMAR_ALPHABET, max_size=300))
    @settings(max_examples=100)
    def test_deterministic(self, source: str) -> None:
        """Scanning the same text twice gives the same sequence."""
        assert list(Scanner(source, "<prop>")) == list(Scanner(source, "<prop>"))

    @given(st.text(alphabet=GRAMMAR_ALPHABET, max_size=300))
    @settings(max_examples=100)
    def test_lines_track_newlines(self, source: str) -> None:
        """No item lies beyond the last line of the source."""
        last_line = source.count("\n") + 1
        for item in Scanner(source, "<prop>"):
            assert location_of(item).line <= last_line


class TestBuilderInvariants:
    """Invariants of the symbol-table builder."""

    @given(st.text(alphabet=GRAMMAR_ALPHABET, max_size=300), st.booleans())
    @settings(max_examples=200)
    def test_never_raises(self, source: str, verbose: bool) -> None:
        """Malformed input produces diagnostics, never exceptions."""
        table = SymbolTableBuilder.run(Scanner(source, "<prop>"), verbose=verbose)
        for obj in table.objects.values():
            for index in obj.values:
                assert 0 <= index < len(table.values)

    @given(st.text(alphabet=GRAMMAR_ALPHABET, max_size=300))
    @settings(max_examples=100)
    def test_no_names_pending_after_finish(self, source: str) -> None:
        builder = SymbolTableBuilder()
        for item in Scanner(source, "<prop>"):
            builder.feed(item)
        builder.finish()
        assert builder.pending_names == ()

    @given(st.text(alphabet=GRAMMAR_ALPHABET, max_size=300))
    @settings(max_examples=100)
    def test_quiet_mode_drops_only_lexical_errors(self, source: str) -> None:
        items = list(Scanner(source, "<prop>"))
        loud = SymbolTableBuilder.run(items, verbose=True)
        quiet = SymbolTableBuilder.run(items, verbose=False)
        assert [e for e in loud.errors if not isinstance(e, LexError)] == quiet.errors

    @given(well_formed_programs())
    @settings(max_examples=100)
    def test_well_formed_programs_have_no_errors(self, program) -> None:
        source = "\n".join(text for text, _ in program)
        table = SymbolTableBuilder.run(Scanner(source, "<prop>"))
        assert table.errors == []
        assert len(table.values) == sum(count for _, count in program)

    @given(well_formed_programs())
    @settings(max_examples=100)
    def test_stacks_restored_after_each_declaration(self, program) -> None:
        """Both stacks return to their top-level state after every construct."""
        builder = SymbolTableBuilder()
        for text, _ in program:
            for item in Scanner(text, "<prop>"):
                builder.feed(item)
            assert builder.pending_names == ()
            assert builder.context_stack == (Context.TOP,)
        assert builder.finish().errors == []
