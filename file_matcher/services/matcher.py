"""Product-code matching against file names."""

import re

from ..models.common import FileDescriptor, MatchedFile
from ..models.match import FileTypeFilter, MatchOutcome, MatchResult, MatchStatus
from .classifier import file_extension

_CODE_SEPARATORS = re.compile(r"[,\n]")


def parse_codes(text: str) -> list[str]:
    """Split raw input on commas and newlines, keeping non-empty trimmed tokens."""
    return [code.strip() for code in _CODE_SEPARATORS.split(text) if code.strip()]


def filter_by_type(files: list[FileDescriptor], type_filter: FileTypeFilter) -> list[FileDescriptor]:
    allowed = type_filter.extensions
    if allowed is None:
        return list(files)
    return [f for f in files if file_extension(f.name) in allowed]


def match_files(
    files: list[FileDescriptor],
    codes: list[str],
    type_filter: FileTypeFilter = FileTypeFilter.ALL,
) -> MatchResult:
    """Case-insensitive substring match of every code against every file name.

    Files matching no code are dropped. Codes are reported in input order,
    both per file and in the unmatched list.
    """
    searched = filter_by_type(files, type_filter)
    lowered = [(code, code.lower()) for code in codes]

    matched: list[MatchedFile] = []
    for f in searched:
        name = f.name.lower()
        hits = [code for code, needle in lowered if needle in name]
        if hits:
            matched.append(MatchedFile(
                **f.model_dump(),
                handle=f.handle,
                matched_codes=hits,
            ))

    seen = {code for m in matched for code in m.matched_codes}
    unmatched = [code for code in codes if code not in seen]

    return MatchResult(
        matched_files=matched,
        unmatched_codes=unmatched,
        searched_count=len(searched),
    )


def evaluate(
    files: list[FileDescriptor],
    code_text: str,
    type_filter: FileTypeFilter = FileTypeFilter.ALL,
) -> MatchOutcome:
    """Validate the inputs, then match. Never raises for string input."""
    if not files:
        return MatchOutcome(status=MatchStatus.NO_FILES)
    if not code_text.strip():
        return MatchOutcome(status=MatchStatus.NO_CODES)

    codes = parse_codes(code_text)
    if not codes:
        return MatchOutcome(status=MatchStatus.INVALID_CODES)

    if not filter_by_type(files, type_filter):
        return MatchOutcome(status=MatchStatus.NO_FILES_OF_TYPE, codes=codes)

    result = match_files(files, codes, type_filter)
    status = MatchStatus.MATCHED if result.matched_files else MatchStatus.NO_MATCH
    return MatchOutcome(status=status, codes=codes, result=result)
