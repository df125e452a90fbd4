"""Core value types and geometry shared by the classifiers."""
