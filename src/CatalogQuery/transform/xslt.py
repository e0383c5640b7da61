"""XSLT transform of a catalog file into a display artifact.

Independent of the query core: failures here never touch parser state.
"""

from __future__ import annotations

from pathlib import Path

from lxml import etree

from CatalogQuery.core.errors import CatalogError
from CatalogQuery.parsers.base import make_xml_parser
from CatalogQuery.utils.log import log


class TransformError(CatalogError):
    """Stylesheet or source could not be applied."""


def transform_catalog(source: Path, stylesheet: Path, target: Path) -> Path:
    """Apply a fixed XSLT rule file to the catalog and write the result.

    Args:
        source: Catalog markup file.
        stylesheet: XSLT rule file.
        target: Output path; parent directories are created.

    Returns:
        The written target path.

    Raises:
        TransformError: If either input cannot be parsed or the transform fails.
    """
    try:
        document = etree.parse(str(source), make_xml_parser())
        xslt = etree.XSLT(etree.parse(str(stylesheet), make_xml_parser()))
        result = xslt(document)
    except (OSError, etree.XMLSyntaxError, etree.XSLTError) as error:
        raise TransformError(f"Transform of {source} with {stylesheet} failed: {error}") from error

    for entry in xslt.error_log:
        log.debug("XSLT %s:%d %s", entry.filename, entry.line, entry.message)

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(bytes(result))
    log.info("Transformed %s -> %s", source, target)
    return target
