"""Transcript cursor: diagnostic matching interleaved with file-stack bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from texlogpy.diagnostics import Diagnostic
from texlogpy.parser.files import FileOracle, NullFileOracle, resolve_file_reference
from texlogpy.parser.options import LogParserOptions
from texlogpy.parser.patterns import DiagnosticRule, match_diagnostic, pattern_table
from texlogpy.parser.rerun import rerun_rule_at
from texlogpy.parser.state import ParseState

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LogParseResult:
    """Diagnostics in discovery order plus the cursor state the parse ended in."""

    diagnostics: list[Diagnostic]
    state: ParseState


class LogParser:
    """Single-use cursor over one transcript.

    Every successful pattern match restarts the scan from the first rule, and
    the text between file markers is walked run by run, so the cost can grow
    faster than linearly on adversarial input. Each `step` either consumes text
    or reaches the end, which bounds the loop by the transcript length.
    """

    def __init__(
        self,
        text: str,
        *,
        root_file: str | None = None,
        oracle: FileOracle | None = None,
        options: LogParserOptions | None = None,
    ) -> None:
        self._options = options or LogParserOptions()
        self._oracle: FileOracle = oracle if oracle is not None else NullFileOracle()
        self._root_file = root_file
        self._rules: tuple[DiagnosticRule, ...] = pattern_table(self._options.wrap_width)
        self._state = ParseState(text=_normalize_newlines(text), current_file=root_file)
        self._diagnostics: list[Diagnostic] = []

    @property
    def state(self) -> ParseState:
        return self._state

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def options(self) -> LogParserOptions:
        return self._options

    def step(self) -> None:
        """Run one outer iteration: match diagnostics, then one file-stack move."""
        state = self._state
        state.skip_whitespace()
        self._match_diagnostics()

        rule = rerun_rule_at(state.text, state.position)
        if rule is not None:
            logger.debug("latexmk rule %r starts a new pass; discarding %d diagnostics", rule, len(self._diagnostics))
            self._diagnostics.clear()

        state.skip_plain_text()
        if state.head == ")":
            closing = state.current_file
            state.close_paren()
            if closing != state.current_file:
                logger.debug("Closed %s, back in %s", closing, state.current_file)
        elif state.head == "(":
            reference = resolve_file_reference(
                state.text,
                state.position,
                self._oracle,
                root_file=self._root_file,
                wrap_width=self._options.wrap_width,
            )
            if reference is not None:
                logger.debug("Opened %s", reference.path)
                state.open_file(reference.path, reference.end)
            else:
                state.open_stray_paren()

    def run(self) -> LogParseResult:
        while not self._state.at_end:
            self.step()
        return LogParseResult(diagnostics=self._diagnostics, state=self._state)

    def _match_diagnostics(self) -> None:
        state = self._state
        min_severity = self._options.min_severity
        while (matched := match_diagnostic(self._rules, state.text, state.position, state.current_file)) is not None:
            diagnostic, end = matched
            if diagnostic.severity >= min_severity:
                self._diagnostics.append(diagnostic)
            state.advance_to(end)
            state.skip_whitespace()


def parse_log(
    text: str,
    *,
    root_file: str | None = None,
    oracle: FileOracle | None = None,
    options: LogParserOptions | None = None,
) -> LogParseResult:
    """Parse an engine transcript into diagnostics attributed to their source files."""
    return LogParser(text, root_file=root_file, oracle=oracle, options=options).run()


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n")
