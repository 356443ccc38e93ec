"""External tools driven by isicreate: git and the JavaScript package managers."""
