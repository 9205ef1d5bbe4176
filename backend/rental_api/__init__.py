"""Vehicle rental booking service."""
