from __future__ import annotations

"""
Reference Detection and Literal Rewriting.

Cross-file references are found by plain substring matching on file names,
not by parsing JS/CSS/HTML. Generated build names are content-hashed, so a
false positive inside unrelated text is improbable.
"""

import re
from typing import Dict, Iterable, List, Tuple

from assetcdn.domain.models import FileRecord

# -----------------------------------------------------------------------------
# PUBLIC PATH HANDLING
# -----------------------------------------------------------------------------

def strip_public_path(base: str, text: str) -> str:
    """
    Neutralize the bundler helper that prefixes dynamic imports with the base.

    Replaces the first 'return"<base>"+' with 'return""+' so that a fully
    qualified remote location substituted later is not prefixed twice.

    Args:
        base: Public path prefix (e.g. "/static/").
        text: Script source.

    Returns:
        str: Script source with the helper prefix removed.
    """
    if not base:
        return text
    return text.replace(f'return"{base}"+', 'return""+', 1)

# -----------------------------------------------------------------------------
# LITERAL REPLACEMENT
# -----------------------------------------------------------------------------

def replace_all_literal(text: str, needle: str, replacement: str) -> str:
    """
    Replace every occurrence of a literal needle in a single pass.

    The scan never revisits inserted text, so it terminates even when the
    replacement itself contains the needle.
    """
    if not needle:
        return text
    return text.replace(needle, replacement)


def replace_literals(
        text: str,
        replacements: Dict[str, str],
        protected: Iterable[str] = (),
) -> Tuple[str, int]:
    """
    Substitute several literal needles in one left-to-right scan.

    At a given position the longest candidate wins, and text produced by a
    replacement is never matched again by another needle. Occurrences of a
    protected string (remote locations written by an earlier rewrite) are
    kept verbatim even when a needle occurs inside them.

    Args:
        text: Source text.
        replacements: Needle to replacement mapping.
        protected: Strings that must survive untouched.

    Returns:
        Tuple[str, int]: Rewritten text and the number of substitutions.
    """
    needles = [n for n in replacements if n]
    if not needles:
        return text, 0

    keep = {p for p in protected if p and p in text and p not in replacements}
    candidates = sorted(set(needles) | keep, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(c) for c in candidates))
    count = 0

    def _substitute(match: "re.Match[str]") -> str:
        nonlocal count
        found = match.group(0)
        if found in keep:
            return found
        count += 1
        return replacements[found]

    return pattern.sub(_substitute, text), count


def mask_literals(text: str, literals: Iterable[str]) -> str:
    """Blank out every occurrence of the given strings, keeping offsets stable."""
    for literal in sorted(set(literals), key=len, reverse=True):
        if literal and literal in text:
            text = text.replace(literal, "\0" * len(literal))
    return text


def reference_needles(base: str, target: FileRecord, referrer_is_script: bool) -> List[str]:
    """
    List the textual idioms under which a referrer may point at a target.

    Every referrer may use 'base + prefix + name'. Scripts additionally use the
    base-less 'prefix + name' and the relative './name' forms.
    """
    needles = [base + target.prefix + target.file_name]
    if referrer_is_script:
        needles.append(target.prefix + target.file_name)
        needles.append("./" + target.file_name)
    return needles

# -----------------------------------------------------------------------------
# REFERENCE GRAPH
# -----------------------------------------------------------------------------

def find_references(
        current: FileRecord,
        text: str,
        files: Iterable[FileRecord],
) -> List[FileRecord]:
    """
    Return the files whose base name occurs in the given text.

    The current file and markup documents are never reference targets;
    markup documents are only traversal entry points.
    """
    found: List[FileRecord] = []
    for candidate in files:
        if candidate.file_name == current.file_name:
            continue
        if candidate.is_markup:
            continue
        if candidate.file_name in text:
            found.append(candidate)
    return found
