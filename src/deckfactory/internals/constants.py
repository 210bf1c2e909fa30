"""Application-wide constants and configuration values."""

# Defaults for UserConfig. Each can be overridden by env var, TOML config, or CLI flag.
DEFAULT_MAX_PER_RUN = 15
DEFAULT_TRANSCRIPT_REPO = "https://github.com/protokolFSP/FSPtranskript"
DEFAULT_TRANSCRIPT_DIR = "transcripts"
DEFAULT_WORK_DIR = "work"
DEFAULT_OUT_PPTX_DIR = "decks"
DEFAULT_OUT_PDF_DIR = "decks_pdf"
DEFAULT_MANIFEST_PATH = "manifest/manifest.csv"
DEFAULT_NOTEBOOK_ALIAS = "deckfactory"
DEFAULT_NOTEBOOK_NAME = "Deck Factory"

# Only plain-text transcripts are picked up; .srt and friends live next to them in the mirror.
TRANSCRIPT_SUFFIX = ".txt"

PPTX_SUFFIX = ".pptx"
PDF_SUFFIX = ".pdf"

# Written once, when the manifest is first created.
MANIFEST_HEADER = (
    "timestamp_utc,transcript_relpath,deck_name,status,pptx_path,pdf_path,message"
)

# Manifest messages. These strings are part of the ledger format; change with care.
MSG_ALREADY_EXISTS = "already exists"
MSG_SOURCE_ADD_FAILED = "source add failed"
MSG_SOURCE_ID_PARSE_FAILED = "source id parse failed"
MSG_STUDIO_CREATE_FAILED = "studio create failed"
MSG_PPTX_DOWNLOAD_FAILED = "pptx download failed"
MSG_PDF_NO_OUTPUT = "pdf convert produced no output"
MSG_PDF_CONVERSION_FAILED = "pdf conversion failed (pptx kept)"
MSG_OK = "ok"

# Process exit codes
EXIT_OK = 0
EXIT_FATAL = 1
EXIT_MISSING_LOGIN = 2

# External executables
NLM_BINARY = "nlm"
GIT_BINARY = "git"
SOFFICE_BINARIES = ("soffice", "libreoffice")

# Fallback for get_debug_mode() in utils
DEBUG_MODE_DEFAULT = False  # Hard-coded default
