"""modeless — convert the word before the cursor without an input mode."""
