from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True)
class CommitRecord:
    """One entry of a commit log."""

    hash: str
    author: str
    message: str
    timestamp: datetime

    @property
    def short_hash(self) -> str:
        return self.hash[:7]

    @classmethod
    def from_commit(cls, commit) -> "CommitRecord":
        """Build a record from a dulwich Commit object."""
        tz = timezone(timedelta(seconds=commit.author_timezone))
        encoding = (commit.encoding or b"utf-8").decode("ascii")
        return cls(
            hash=commit.id.decode("ascii"),
            author=commit.author.decode(encoding, errors="replace"),
            message=commit.message.decode(encoding, errors="replace"),
            timestamp=datetime.fromtimestamp(commit.author_time, tz=tz),
        )
