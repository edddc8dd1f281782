"""
sqlgen — generowanie SQL i import do PostgreSQL.

Publiczne API:
  BatchInsertWriter(cur, table, columns, batch_size, on_flush)   zapis wsadowy
  ImportTransaction(conn)                                        BEGIN/COMMIT/ROLLBACK
  import_translation(conn, translation, ...)                     -> int
  generate_translation_script(translation, ...)                  -> str
  import_cross_references(conn, refs, ...)                       -> int
  generate_cross_reference_script(refs, source_name, ...)        -> str
  list_translations(cur) / summarize_translations(cur) / delete_translation(cur, code)
  CORPUS_SCHEMA, CROSS_REFERENCE_SCHEMA, apply_schema(cur, statements)
"""

from .errors import (
    BibleSqlError,
    ConfigError,
    NotFoundError,
    SourceParseError,
    ConstraintError,
    BackendConnectionError,
    WriteError,
    translate_db_error,
)
from .schema import CORPUS_SCHEMA, CROSS_REFERENCE_SCHEMA, apply_schema, render_schema
from .batch import DEFAULT_BATCH_SIZE, BatchInsertWriter, build_insert
from .transaction import ImportTransaction, TxState
from .rows import count_cross_reference_rows, count_verses
from .importer import (
    write_translation,
    import_translation,
    generate_translation_script,
    import_cross_references,
    generate_cross_reference_script,
)
from .maintenance import (
    TranslationSummary,
    delete_translation,
    list_translations,
    summarize_translations,
)

__all__ = [
    "BibleSqlError",
    "ConfigError",
    "NotFoundError",
    "SourceParseError",
    "ConstraintError",
    "BackendConnectionError",
    "WriteError",
    "translate_db_error",
    "CORPUS_SCHEMA",
    "CROSS_REFERENCE_SCHEMA",
    "apply_schema",
    "render_schema",
    "DEFAULT_BATCH_SIZE",
    "BatchInsertWriter",
    "build_insert",
    "ImportTransaction",
    "TxState",
    "count_cross_reference_rows",
    "count_verses",
    "write_translation",
    "import_translation",
    "generate_translation_script",
    "import_cross_references",
    "generate_cross_reference_script",
    "TranslationSummary",
    "delete_translation",
    "list_translations",
    "summarize_translations",
]
