"""Provider drivers for ai-commit."""
