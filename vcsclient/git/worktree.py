"""
Repository operations for disk- and memory-backed repositories.

Both flavours share the ref-level operations (current branch, log, push) that
only need the dulwich repository object. Operations touching the working tree
differ:

- DiskWorktree drives a ``dulwich.repo.Repo`` through ``dulwich.porcelain``.
- MemoryWorktree pairs a ``dulwich.repo.MemoryRepo`` (objects and refs) with a
  MemoryFileSystem holding the checked-out files. A MemoryRepo has no index,
  so commits are built straight from the working tree.
"""

import logging
import os
import stat
from typing import Dict, List, Optional

from dulwich import porcelain
from dulwich.index import commit_tree
from dulwich.object_store import iter_tree_contents
from dulwich.objects import Blob, TreeEntry
from dulwich.refs import SYMREF

from vcsclient.constants import ResetMode
from vcsclient.errors import DetachedHeadError
from vcsclient.model.records import CommitRecord
from .memfs import MemoryFileSystem

logger = logging.getLogger(__name__)

HEAD = b"HEAD"
BRANCH_PREFIX = b"refs/heads/"


def branch_ref(name: str) -> bytes:
    """Fully-qualified branch reference for a short branch name."""
    encoded = name.encode("utf-8")
    if encoded.startswith(BRANCH_PREFIX):
        return encoded
    return BRANCH_PREFIX + encoded


class Worktree:
    """Operations shared by both backends."""

    def __init__(self, repo):
        self.repo = repo

    def head_commit(self) -> Optional[bytes]:
        """SHA of the HEAD commit, or None on an unborn branch."""
        try:
            return self.repo.head()
        except KeyError:
            return None

    def current_branch(self) -> str:
        contents = self.repo.refs.read_ref(HEAD)
        if contents is None:
            raise KeyError("HEAD")
        if contents.startswith(SYMREF):
            return contents[len(SYMREF) :].strip().decode("utf-8")
        raise DetachedHeadError(contents.decode("ascii"))

    def logs(self) -> List[CommitRecord]:
        head = self.head_commit()
        if head is None:
            return []
        return [
            CommitRecord.from_commit(entry.commit)
            for entry in self.repo.get_walker(include=[head])
        ]

    def push(self, remote_location: str, **transport_kwargs) -> None:
        ref = self.current_branch().encode("utf-8")
        logger.info(f"Pushing {ref.decode()} to {remote_location}")
        porcelain.push(
            self.repo,
            remote_location,
            [ref],
            **transport_kwargs,
        )

    def commit_all(self, message: str, identity: Optional[bytes] = None) -> str:
        raise NotImplementedError

    def checkout_branch(self, name: str) -> None:
        raise NotImplementedError

    def reset(self, mode: ResetMode) -> None:
        raise NotImplementedError


class DiskWorktree(Worktree):
    def _stage_all(self) -> None:
        root = self.repo.path
        status = porcelain.status(self.repo, untracked_files="all")

        to_add = [os.path.join(root, p) for p in status.untracked]
        removed = []
        for tree_path in status.unstaged:
            full_path = os.path.join(root, os.fsdecode(tree_path))
            if os.path.lexists(full_path):
                to_add.append(full_path)
            else:
                removed.append(os.fsencode(tree_path))

        if to_add:
            porcelain.add(self.repo, paths=to_add)
        if removed:
            index = self.repo.open_index()
            for tree_path in removed:
                del index[tree_path]
            index.write()
        logger.debug(f"Staged {len(to_add)} changed and {len(removed)} removed paths")

    def commit_all(self, message: str, identity: Optional[bytes] = None) -> str:
        self._stage_all()
        sha = porcelain.commit(
            self.repo,
            message=message.encode("utf-8"),
            author=identity,
            committer=identity,
        )
        return sha.decode("ascii")

    def checkout_branch(self, name: str) -> None:
        ref = branch_ref(name)
        head = self.head_commit()
        if head is None:
            # unborn branch: nothing to check out, just point HEAD elsewhere
            self.repo.refs.set_symbolic_ref(HEAD, ref)
            return
        if ref not in self.repo.refs:
            self.repo.refs[ref] = head
            logger.debug(f"Created branch {ref.decode()} at {head.decode()[:7]}")
        porcelain.checkout(self.repo, ref[len(BRANCH_PREFIX) :].decode("utf-8"))

    def reset(self, mode: ResetMode) -> None:
        porcelain.reset(self.repo, mode.value)
        if mode == ResetMode.HARD:
            # also drop files that were never committed
            porcelain.clean(self.repo, self.repo.path)


class MemoryWorktree(Worktree):
    def __init__(self, repo, fs: MemoryFileSystem):
        super().__init__(repo)
        self.fs = fs

    def _tree_entries(self, commit_sha: Optional[bytes]) -> Dict[str, TreeEntry]:
        """File entries of the tree of *commit_sha*, keyed by path."""
        if commit_sha is None:
            return {}
        store = self.repo.object_store
        entries = {}
        for entry in iter_tree_contents(store, self.repo[commit_sha].tree):
            if stat.S_ISDIR(entry.mode) or entry.mode == 0o160000:
                # submodules have no content in this repository
                continue
            entries[entry.path.decode("utf-8")] = entry
        return entries

    def populate(self, commit_sha: Optional[bytes]) -> None:
        """Replace the working tree with the tree of *commit_sha*."""
        self.fs.clear()
        store = self.repo.object_store
        for path, entry in self._tree_entries(commit_sha).items():
            self.fs.write(path, store[entry.sha].as_raw_string(), mode=entry.mode)

    def _switch_tree(self, head: Optional[bytes], target: bytes) -> None:
        """
        Move the working tree from *head* to *target*.

        Local changes are carried over unless the checkout would overwrite
        them, in which case nothing is touched and CheckoutError is raised.
        """
        current = self._tree_entries(head)
        incoming = self._tree_entries(target)
        local = {path: (data, mode) for path, data, mode in self.fs.walk()}

        changed = {
            path
            for path, (data, _) in local.items()
            if path not in current or Blob.from_string(data).id != current[path].sha
        }
        deleted = set(current) - set(local)
        conflicts = sorted(
            path
            for path in changed | deleted
            if _entry_sha(current.get(path)) != _entry_sha(incoming.get(path))
        )
        if conflicts:
            raise porcelain.CheckoutError(
                "Your local changes to the following files would be overwritten "
                f"by checkout: {', '.join(conflicts)}"
            )

        self.populate(target)
        for path in changed:
            data, mode = local[path]
            self.fs.write(path, data, mode=mode)
        for path in deleted:
            if self.fs.isfile(path):
                self.fs.remove(path)

    def _write_tree(self) -> bytes:
        store = self.repo.object_store
        blobs = []
        for path, data, mode in self.fs.walk():
            blob = Blob.from_string(data)
            store.add_object(blob)
            blobs.append((path.encode("utf-8"), blob.id, mode))
        return commit_tree(store, blobs)

    def commit_all(self, message: str, identity: Optional[bytes] = None) -> str:
        tree = self._write_tree()
        # the in-memory ref store does not follow HEAD on compare-and-swap
        ref = self.repo.refs.follow(HEAD)[0][-1]
        sha = self.repo.do_commit(
            message=message.encode("utf-8"),
            tree=tree,
            author=identity,
            committer=identity,
            ref=ref,
        )
        return sha.decode("ascii")

    def checkout_branch(self, name: str) -> None:
        ref = branch_ref(name)
        head = self.head_commit()
        if ref not in self.repo.refs:
            if head is not None:
                self.repo.refs[ref] = head
                logger.debug(f"Created branch {ref.decode()} at {head.decode()[:7]}")
            self.repo.refs.set_symbolic_ref(HEAD, ref)
            return
        target = self.repo.refs[ref]
        if target != head:
            self._switch_tree(head, target)
        self.repo.refs.set_symbolic_ref(HEAD, ref)

    def reset(self, mode: ResetMode) -> None:
        # Branch pointer already equals HEAD and there is no index, so only a
        # hard reset has something to do.
        if mode == ResetMode.HARD:
            self.populate(self.head_commit())


def _entry_sha(entry: Optional[TreeEntry]) -> Optional[bytes]:
    return None if entry is None else entry.sha
