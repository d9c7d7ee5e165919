"""mdtabs: a tabbed Markdown editor with a live HTML preview."""
