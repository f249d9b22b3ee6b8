#!/usr/bin/env python3
"""ctedit - a small terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys: Navigate cursor (keeps the column on vertical moves)
    Ctrl-S: Save file
    Ctrl-L: Load file
    Ctrl-F: Find (arrows cycle matches, Enter keeps, Esc returns)
    Ctrl-C: Quit (press twice)
    Type to insert text, Tab inserts four spaces
    Backspace: Delete character
    Enter: Split line
"""

from ctedit.__main__ import main


if __name__ == "__main__":
    main()
