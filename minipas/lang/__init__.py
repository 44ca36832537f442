"""Error reporting, sessions and the interactive shell for minipas."""
