"""Storage backends for loading datasets and writing result tables."""
