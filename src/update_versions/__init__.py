"""Keeps the generated golangci-lint versions file in sync with GitHub releases."""
