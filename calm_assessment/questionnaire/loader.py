"""YAML question bank loader with integrity verification."""

import hashlib
import logging
from pathlib import Path
from typing import Any

import yaml

from calm_assessment.questionnaire.models import QuestionBank, QuestionBankError

logger = logging.getLogger(__name__)

# Default question banks directory
QUESTION_BANKS_DIR = Path(__file__).parent.parent / "question_banks"


def compute_bank_hash(content: str) -> str:
    """Compute SHA256 hash of question bank content.

    Used for audit trail so a result can be tied to the exact bank
    that produced it.

    Args:
        content: Raw YAML content string

    Returns:
        SHA256 hex digest
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def parse_question_bank(content: str) -> QuestionBank:
    """Parse and validate question bank YAML content.

    Raises:
        QuestionBankError: If the YAML is invalid or the bank is malformed
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise QuestionBankError(f"Invalid question bank YAML: {exc}") from exc

    return QuestionBank.from_dict(data, content_hash=compute_bank_hash(content))


def load_question_bank(
    filename: str,
    banks_dir: Path | None = None,
) -> QuestionBank:
    """Load a question bank YAML file.

    Args:
        filename: Name of the bank file (e.g., "calm-v1.0.0.yaml")
        banks_dir: Directory containing banks (defaults to the packaged banks)

    Returns:
        Validated QuestionBank carrying the file's SHA256 hash

    Raises:
        FileNotFoundError: If bank file doesn't exist
        QuestionBankError: If the bank is malformed
    """
    if banks_dir is None:
        banks_dir = QUESTION_BANKS_DIR

    filepath = banks_dir / filename

    if not filepath.exists():
        raise FileNotFoundError(f"Question bank not found: {filepath}")

    bank = parse_question_bank(filepath.read_text(encoding="utf-8"))
    logger.info(
        f"Loaded question bank {bank.id} v{bank.version} "
        f"({len(bank.questions)} questions, hash={bank.content_hash[:12]})",
        extra={"bank_id": bank.id, "bank_version": bank.version},
    )
    return bank


class QuestionBankLoader:
    """Stateful question bank loader with caching."""

    def __init__(self, banks_dir: Path | None = None) -> None:
        """Initialize loader.

        Args:
            banks_dir: Directory containing question banks
        """
        self.banks_dir = banks_dir or QUESTION_BANKS_DIR
        self._cache: dict[str, QuestionBank] = {}

    def load(self, filename: str, use_cache: bool = True) -> QuestionBank:
        """Load a question bank with optional caching."""
        if use_cache and filename in self._cache:
            return self._cache[filename]

        bank = load_question_bank(filename, self.banks_dir)
        self._cache[filename] = bank

        return bank

    def clear_cache(self) -> None:
        """Clear the question bank cache."""
        self._cache.clear()

    def list_banks(self) -> list[str]:
        """List available question bank files."""
        return sorted(f.name for f in self.banks_dir.glob("*.yaml"))

    def get_bank_info(self, filename: str) -> dict[str, Any]:
        """Get metadata about a question bank.

        Returns:
            Dict with filename, id, version, description, question count, hash
        """
        bank = self.load(filename)

        return {
            "filename": filename,
            "id": bank.id,
            "version": bank.version,
            "description": bank.description,
            "question_count": len(bank.questions),
            "hash": bank.content_hash,
        }
