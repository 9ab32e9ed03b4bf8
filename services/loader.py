"""
Scan log loading for Parity.

Reads log files from disk or from uploads, recovers plain text from HTML
exports and hands the text to the core tokenizer.
"""
import logging
from pathlib import Path
from typing import Optional, Union

from bs4 import BeautifulSoup

from core.sections import ParsedLog, parse_log
from config import settings

logger = logging.getLogger(__name__)


def decode_content(raw: Union[bytes, str]) -> Optional[str]:
    """
    Decode uploaded bytes as UTF-8, dropping a BOM if present.

    Returns None if the bytes are not valid UTF-8.
    """
    if isinstance(raw, str):
        return raw.lstrip("\ufeff")
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.error(f"Content is not valid UTF-8: {e}")
        return None


def is_html_filename(filename: str) -> bool:
    return Path(filename).suffix.lower() in settings.HTML_EXTENSIONS


def is_log_filename(filename: str) -> bool:
    return Path(filename).suffix.lower() in settings.LOG_FILE_EXTENSIONS


def extract_text_from_html(html: str) -> str:
    """
    Recover the scan output from an HTML export.

    The text of every <pre> block is used, each followed by a newline.
    Pages without <pre> fall back to the text of the whole document.
    """
    soup = BeautifulSoup(html, "html.parser")

    pre_tags = soup.find_all("pre")
    if pre_tags:
        return "".join(pre.get_text() + "\n" for pre in pre_tags)

    body = soup.body
    if body is not None:
        return body.get_text()
    return soup.get_text()


def load_log_content(content: Union[bytes, str], filename: str) -> Optional[ParsedLog]:
    """
    Parse log content directly (for API uploads).

    Args:
        content: Raw file content
        filename: Original filename; an .html/.htm suffix triggers text extraction

    Returns:
        ParsedLog, or None if the content is unreadable or has no recognizable sections
    """
    text = decode_content(content)
    if text is None:
        logger.warning(f"Could not decode {filename}")
        return None

    if is_html_filename(filename):
        text = extract_text_from_html(text)

    parsed = parse_log(text, name=filename)

    if not parsed.is_recognized:
        logger.warning(f"No sections recognized in {filename}")
        return None

    logger.info(f"Parsed {filename}: {parsed.section_count} sections ({parsed.grammar.value})")
    return parsed


def load_log_file(file_path: Union[str, Path], name: Optional[str] = None) -> Optional[ParsedLog]:
    """
    Parse a scan log from disk.

    Args:
        file_path: Path to the log file
        name: Name to give the parsed log; defaults to the file name

    Returns:
        ParsedLog or None if reading or parsing fails
    """
    path = Path(file_path)

    if not path.is_file():
        logger.error(f"File not found: {file_path}")
        return None

    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.error(f"Error reading {file_path}: {e}")
        return None

    return load_log_content(raw, name or path.name)
