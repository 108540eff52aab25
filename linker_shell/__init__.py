"""Command-line adapter: builds a link and hands it to the browser and clipboard."""
