"""
File naming for the generated pages.

Every page has a tag tuple: () for the index, (input,) for a comparison
page, (input, job) for a job detail page. Tags are prefixed to the
leaf name of the configured file, joined with "-":

    relative_file_path("out/results.html", ("big list", "flat_map"))
    -> "big.20.list-flat_map-results.html"

Sanitized tags only contain [A-Za-z0-9_] plus ".<hex>." escapes, so "-" is
free to act as the separator and two different tag tuples never share a path.
"""

import os
import re
from typing import Dict, List, Optional, Sequence, Tuple

NO_INPUT_TAG = "no.input"  # no escape sequence spells this, so no name can collide
SEPARATOR = "-"

Tags = Tuple[Optional[str], ...]

_UNSAFE = re.compile(r"[^A-Za-z0-9_]")


def sanitize(tag: Optional[str]) -> str:
    if tag is None:
        return NO_INPUT_TAG
    return _UNSAFE.sub(lambda m: f".{ord(m.group(0)):x}.", tag)


def relative_file_path(filename: str, tags: Sequence[Optional[str]]) -> str:
    leaf = os.path.basename(filename)
    if not tags:
        return leaf
    return SEPARATOR.join([sanitize(t) for t in tags] + [leaf])


def comparison_tags(input_name: Optional[str]) -> Tags:
    return (input_name,)


def job_tags(input_name: Optional[str], job_name: str) -> Tags:
    return (input_name, job_name)


def inputs_to_paths(
    reports: Dict[Optional[str], List[Tags]], filename: str
) -> Dict[Optional[str], List[str]]:
    """Layout map: input name -> its page paths, comparison page first.

    ``reports`` maps each input to the tag tuples of its pages, in the order
    they should be linked.
    """
    return {
        input_name: [relative_file_path(filename, tags) for tags in tag_list]
        for input_name, tag_list in reports.items()
    }
