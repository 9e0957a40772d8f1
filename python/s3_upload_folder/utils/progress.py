"""アップロード進捗管理"""
import sys
import threading
from typing import Optional, TextIO


class ProgressCounter:
    """完了ファイル数のカウンター

    表示専用。減算はしない。
    """

    def __init__(self, total: int):
        self.total = total
        self.completed = 0
        self.lock = threading.Lock()

    def increment(self) -> int:
        with self.lock:
            self.completed += 1
            return self.completed

    @property
    def percentage(self) -> int:
        if self.total == 0:
            return 100
        return self.completed * 100 // self.total


class ProgressBar:
    """コンソールにプログレスバーを表示"""

    WIDTH = 20

    def __init__(self, counter: ProgressCounter, stream: Optional[TextIO] = None):
        self.counter = counter
        self.stream = stream or sys.stdout

    def render(self) -> str:
        percentage = self.counter.percentage
        filled = percentage * self.WIDTH // 100
        bar = "[" + "=" * filled + " " * (self.WIDTH - filled) + "]"
        return f"{bar} {self.counter.completed}/{self.counter.total} ({percentage}%)"

    def update(self):
        """進捗を上書き表示"""
        print(f"\r{self.render()}", end="", file=self.stream, flush=True)

    def finish(self):
        print(file=self.stream, flush=True)
