"""Extract contact lists (CSV, vCard) from Outlook for Mac ``.olm`` backups."""

__version__ = "1.0.0"

from .utils import load_env, setup_logging
from .models import Candidate, Contact, ExtractionResult, Role
from .registry import ContactRegistry
from .pipeline import extract_contacts, extract_from_path
from .worker import run_extraction_in_thread

__all__ = [
    "Candidate",
    "Contact",
    "ContactRegistry",
    "ExtractionResult",
    "Role",
    "__version__",
    "extract_contacts",
    "extract_from_path",
    "load_env",
    "run_extraction_in_thread",
    "setup_logging",
]
