"""
best score persistence

a single integer in a text file; any problem reading it means "no best
score yet" and any problem writing it is reported and ignored
"""
import os


def default_path():
    return os.path.join(os.path.expanduser("~"), ".game2028", "best_score.txt")


class BestScoreStore:
    def __init__(self, path=None):
        self.path = path or default_path()

    def load(self):
        """stored best score, 0 if missing or corrupt"""
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r") as f:
                value = int(f.read().strip())
        except (OSError, ValueError):
            return 0
        return max(value, 0)

    def save(self, value):
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w") as f:
                f.write(str(value))
        except OSError as e:
            print(f"[WARNING] could not save best score to {self.path}: {e}")


class MemoryScoreStore:
    """keeps the best score in memory only (headless play and tests)"""

    def __init__(self, value=0):
        self.value = value

    def load(self):
        return self.value

    def save(self, value):
        self.value = value
