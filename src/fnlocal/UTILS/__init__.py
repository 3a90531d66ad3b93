"""Small helpers shared by parsers and managers."""
