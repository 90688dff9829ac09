#!/usr/bin/env python3
"""
Course Sync - Pick which Canvas course content to keep offline.

Lists every active course with its offline-capable tabs and all files in its
folder tree, then applies any --select/--deselect paths given.

Usage:
    python course_sync.py --preview
    python course_sync.py --url https://school.instructure.com --deselect 0:tab:1
"""

import sys

from coursesync.cli import main

if __name__ == "__main__":
    sys.exit(main())
