"""
Best-effort scan for functions without a JSDoc comment.

Pattern matching, not parsing. Each file is matched twice:

1. Documented declarations: a ``/** ... */`` block directly followed by
   - ``function name(`` (optionally ``async``),
   - ``const|let|var name = (...) =>``, or
   - a method-like member ``name(``.
2. All declarations: ``function name(`` on a line without ``//`` or ``/*``,
   plus the two comment-preceded forms above.

Undocumented names are (2) minus (1), compared by name within the file.

Known imprecision: a lazy ``/** ... */`` match can stretch across several
comments, names that appear both documented and undocumented in one file
count as documented, and keywords such as ``if (`` after a doc block look
like methods. Replace with a real tokenizer if the results need to be exact.
"""

import logging
import os
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Tuple

from ..core.base import CheckReport, ComplianceCheck, Outcome


logger = logging.getLogger(__name__)


SOURCE_EXTENSIONS: Tuple[str, ...] = ('.js', '.ts')
EXCLUDED_DIRS: Tuple[str, ...] = ('node_modules', '.git', 'dist', 'build')

_JSDOC = r'/\*\*[\s\S]*?\*/\s*\n\s*'
_NAME = r'([a-zA-Z0-9_]+)'

DOCUMENTED_FUNCTION = re.compile(_JSDOC + r'(?:async\s+)?function\s+' + _NAME + r'\s*\(', re.MULTILINE)
DOCUMENTED_ARROW = re.compile(
    _JSDOC + r'(?:const|let|var)\s+' + _NAME + r'\s*=\s*(?:async\s*)?\(?\s*[a-zA-Z0-9_,\s]*\)?\s*=>',
    re.MULTILINE,
)
DOCUMENTED_METHOD = re.compile(_JSDOC + r'(?:async\s+)?' + _NAME + r'\s*\(', re.MULTILINE)
ANY_FUNCTION = re.compile(r'^(?!.*//)(?!.*/\*)\s*(?:async\s+)?function\s+' + _NAME + r'\s*\(', re.MULTILINE)


def iter_source_files(
    root: Path,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    excluded_dirs: Iterable[str] = EXCLUDED_DIRS,
) -> Iterator[Path]:
    """
    Yield source files under root, skipping excluded directory names.

    Files are yielded in sorted order per directory.
    """
    extensions = tuple(extensions)
    excluded = set(excluded_dirs)

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded)
        for filename in sorted(filenames):
            if filename.endswith(extensions):
                yield Path(dirpath) / filename


def _names(pattern: re.Pattern, source: str) -> List[str]:
    return [match.group(1) for match in pattern.finditer(source)]


def find_undocumented(source: str) -> List[str]:
    """
    Names of declared functions that lack a preceding JSDoc block.

    Args:
        source: JavaScript/TypeScript source text

    Returns:
        Undocumented names in declaration order, one entry per occurrence
    """
    arrows = _names(DOCUMENTED_ARROW, source)
    methods = _names(DOCUMENTED_METHOD, source)

    documented = set(_names(DOCUMENTED_FUNCTION, source)) | set(arrows) | set(methods)
    declared = _names(ANY_FUNCTION, source) + arrows + methods

    return [name for name in declared if name not in documented]


def scan_documentation(root: Path) -> Dict[Path, List[str]]:
    """
    Scan every source file under root.

    Returns:
        File -> undocumented names, only for files that have any
    """
    findings: Dict[Path, List[str]] = {}
    for path in iter_source_files(root):
        try:
            source = path.read_text(encoding='utf-8')
        except UnicodeDecodeError:
            logger.warning(f"Skipping {path}: not valid UTF-8")
            continue
        undocumented = find_undocumented(source)
        if undocumented:
            findings[path] = undocumented
    return findings


class DocumentationChecker(ComplianceCheck):
    """Fails when any scanned function lacks a JSDoc comment. Never fatal."""

    name = 'checkFunctionComments'
    title = 'JSDoc comments'

    def run(self, mode: str) -> CheckReport:
        self.announce("Checking for JSDoc comments above function definitions...")
        findings = scan_documentation(self.project_root)

        if not findings:
            self.announce_ok("✔ All functions have proper JSDoc documentation.")
            return self.create_report(mode, Outcome.VALID, passed=True)

        details = []
        for path, names in findings.items():
            relative = path.relative_to(self.project_root)
            self.announce_problem(f"❌ Missing JSDoc comments in file: {relative}")
            for fn in names:
                print(f'   ❌ Function "{fn}" lacks documentation.')
                details.append(f"{relative}: {fn}")

        return self.create_report(mode, Outcome.FAILED, passed=False, details=details)
