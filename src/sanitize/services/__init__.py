"""Service layer — operations behind the CLI, returning ServiceResult."""
