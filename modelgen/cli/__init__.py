"""Command line interface (`modelgen ...`)."""
