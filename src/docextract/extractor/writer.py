"""Markdown output writer with YAML frontmatter for extracted text.

Writes the recovered text next to extraction metadata so a run can be
inspected (or loaded by a persistence layer) without re-extracting.

Public API:
    output_path_for(output_dir, source_name)  -> Path
    write_extraction(md_path, result, source_name)  -> None
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path

import frontmatter

from docextract.extractor.types import ExtractionResult

logger = logging.getLogger(__name__)


def output_path_for(output_dir: Path, source_name: str) -> Path:
    """Markdown path for a source file, e.g. ``post.png`` -> ``post.png.md``.

    The original extension is kept so ``scan.pdf`` and ``scan.png`` do not
    collide.
    """
    return output_dir / f"{Path(source_name).name}.md"


def write_extraction(md_path: Path, result: ExtractionResult, source_name: str) -> None:
    """Write a successful extraction to disk with YAML frontmatter.

    Frontmatter fields:

    - ``source_file``: Original filename
    - ``file_type``: ``pdf`` or ``image``
    - ``extraction_method``: Which extractor produced this text
    - ``extraction_date``: UTC ISO-8601 timestamp
    - ``char_count``: Non-whitespace character count
    - ``page_count`` (PDF) or ``ocr_profile`` / ``quality_score`` (image)

    Raises:
        ValueError: If ``result`` is a failure.
    """
    if not result.success:
        raise ValueError("Only successful extractions can be written")

    post = frontmatter.Post(result.text)
    post.metadata["source_file"] = source_name
    post.metadata["file_type"] = "image" if result.profile_name else "pdf"
    post.metadata["extraction_method"] = result.method.value
    post.metadata["extraction_date"] = datetime.datetime.now(datetime.timezone.utc).isoformat()
    post.metadata["char_count"] = result.char_count
    if result.profile_name:
        post.metadata["ocr_profile"] = result.profile_name
        post.metadata["quality_score"] = round(result.quality_score or 0.0, 4)
    else:
        post.metadata["page_count"] = result.page_count
        post.metadata["retried"] = result.retried

    md_path.parent.mkdir(parents=True, exist_ok=True)

    with open(md_path, "w", encoding="utf-8") as f:
        f.write(frontmatter.dumps(post))

    logger.info("Wrote extraction to %s (%d chars)", md_path.name, result.char_count)
