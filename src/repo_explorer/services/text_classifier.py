"""Text classification — decide which files are readable enough to analyse."""

from __future__ import annotations

TEXT_EXTENSIONS: frozenset[str] = frozenset(
    {
        "txt", "md",
        "js", "jsx", "ts", "tsx", "json",
        "html", "css", "scss", "less",
        "py", "java", "rb", "php",
        "c", "cpp", "h", "hpp",
        "sql", "yaml", "yml", "xml",
        "sh", "bash", "zsh",
        "env", "config", "ini",
    }
)


def _filename(path: str) -> str:
    return path.rsplit("/", maxsplit=1)[-1]


def file_extension(path: str) -> str:
    """Return the lower-cased text after the last ``.`` of the file name, or ``""``."""
    name = _filename(path)
    if "." not in name:
        return ""
    return name.rsplit(".", maxsplit=1)[-1].lower()


def is_text_file(path: str) -> bool:
    """Return *True* if the file's extension is on the text allow-list."""
    ext = file_extension(path)
    return bool(ext) and ext in TEXT_EXTENSIONS
