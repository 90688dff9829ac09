"""
Course Sync - Pick which Canvas course content to keep offline.

Import from submodules directly:
    from coursesync.config import CanvasClientConfig
    from coursesync.canvas import CanvasClient, PreviewProvider
    from coursesync.sync import CourseSyncInteractor, SelectionStore
"""

__version__ = "0.1.0"
