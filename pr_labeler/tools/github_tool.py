"""GitHub API wrapper for PR labeling operations."""

import os
from typing import Dict, List, Optional

from github import Github, GithubException
from github.PullRequest import PullRequest

from ..errors import GitHubAPIError
from ..labeling.namespace import resolve_label_changes
from ..models import CheckState, CIStatus, LabelDecisions, LabelUpdate
from ..utils.logging import get_logger
from .file_metrics import DiffFile

logger = get_logger()

COMMENT_MARKER = "<!-- pr-labeler:summary -->"

# GitHub status / check-run conclusions mapped onto CheckState
_STATUS_STATES = {
    "success": CheckState.PASSED,
    "failure": CheckState.FAILED,
    "error": CheckState.FAILED,
    "pending": CheckState.PENDING,
}
_CHECK_CONCLUSIONS = {
    "success": CheckState.PASSED,
    "failure": CheckState.FAILED,
    "timed_out": CheckState.FAILED,
    "action_required": CheckState.FAILED,
    "startup_failure": CheckState.FAILED,
    "cancelled": CheckState.SKIPPED,
    "skipped": CheckState.SKIPPED,
    "neutral": CheckState.SKIPPED,
    "stale": CheckState.SKIPPED,
}


class GitHubTool:
    """
    GitHub API wrapper for PR labeling.

    Handles:
    - Fetching changed files, commits and CI results
    - Creating, adding and removing labels
    - Maintaining a single summary comment
    """

    def __init__(self, repo: str, pr_number: int, token: Optional[str] = None):
        """
        Initialize GitHub tool.

        Args:
            repo: Repository in format "owner/repo"
            pr_number: Pull request number
            token: GitHub token (defaults to GITHUB_TOKEN env var)
        """
        self.token = token or os.environ.get("GITHUB_TOKEN")
        if not self.token:
            raise ValueError("GitHub token required. Set GITHUB_TOKEN env var or pass token parameter.")

        self.gh = Github(self.token)
        try:
            self.repo = self.gh.get_repo(repo)
        except GithubException as e:
            raise GitHubAPIError(f"Cannot access repository {repo}: {e}", e.status) from e
        self.pr_number = pr_number
        self._pr: Optional[PullRequest] = None
        self._repo_labels: Optional[Dict[str, object]] = None

    @property
    def pr(self) -> PullRequest:
        """Get the pull request object (cached)."""
        if self._pr is None:
            try:
                self._pr = self.repo.get_pull(self.pr_number)
            except GithubException as e:
                raise GitHubAPIError(f"Cannot load PR #{self.pr_number}: {e}", e.status) from e
        return self._pr

    @property
    def is_draft(self) -> bool:
        return bool(self.pr.draft)

    @property
    def head_sha(self) -> str:
        return self.pr.head.sha

    def get_diff_files(self) -> List[DiffFile]:
        """Get the files changed in this PR."""
        try:
            return [
                DiffFile(
                    filename=f.filename,
                    additions=f.additions,
                    deletions=f.deletions,
                    status=f.status,
                )
                for f in self.pr.get_files()
            ]
        except GithubException as e:
            raise GitHubAPIError(f"Failed to list files for PR #{self.pr_number}: {e}", e.status) from e

    def get_commit_messages(self) -> List[str]:
        """Subject lines of the PR commits; empty on API failure."""
        try:
            return [c.commit.message.splitlines()[0] for c in self.pr.get_commits() if c.commit.message]
        except GithubException as e:
            logger.warning(f"Could not fetch commits: {e}")
            return []

    def get_ci_status(self) -> Optional[CIStatus]:
        """
        Collect CI results for the PR head commit.

        Returns:
            CIStatus keyed by check name, or None when there are no checks
            or the API call fails
        """
        try:
            commit = self.repo.get_commit(self.head_sha)
            checks: Dict[str, CheckState] = {}

            combined = commit.get_combined_status()
            for status in combined.statuses:
                checks[status.context] = _STATUS_STATES.get(status.state, CheckState.PENDING)

            # Also check check runs (GitHub Actions)
            for run in commit.get_check_runs():
                if run.status != "completed":
                    checks[run.name] = CheckState.PENDING
                else:
                    checks[run.name] = _CHECK_CONCLUSIONS.get(run.conclusion, CheckState.FAILED)

        except GithubException as e:
            logger.warning(f"Could not fetch CI status: {e}")
            return None

        return CIStatus(checks=checks) if checks else None

    def get_current_labels(self) -> List[str]:
        return [label.name for label in self.pr.get_labels()]

    def get_file_size(self, path: str) -> Optional[int]:
        """Size of ``path`` at the PR head via the contents API."""
        try:
            content = self.repo.get_contents(path, ref=self.head_sha)
        except GithubException as e:
            logger.debug(f"Contents API failed for {path}: {e}")
            return None
        if isinstance(content, list) or content.type != "file":
            return None
        return content.size

    def ensure_label(self, name: str, color: str = "cccccc", description: str = "") -> bool:
        """
        Make sure a repository label exists.

        Returns:
            True if the label exists or was created
        """
        if self._repo_labels is None:
            self._repo_labels = {label.name: label for label in self.repo.get_labels()}
        if name in self._repo_labels:
            return True

        try:
            self._repo_labels[name] = self.repo.create_label(name=name, color=color, description=description)
            logger.info(f"Created label {name}")
            return True
        except GithubException as e:
            # 422: created concurrently by another run
            if e.status == 422:
                return True
            logger.warning(f"Failed to create label {name}: {e}")
            return False

    def apply_label_decisions(
        self,
        decisions: LabelDecisions,
        create_missing: bool = True,
        color: str = "cccccc",
        description: str = "",
        auto_remove: bool = True,
    ) -> LabelUpdate:
        """
        Apply engine decisions to the PR.

        Namespace patterns in ``decisions.labels_to_remove`` are resolved
        against the labels currently on the PR; a label that is also being
        added is kept.

        Args:
            decisions: Engine output
            create_missing: Create repository labels that do not exist yet
            color: Color for created labels
            description: Description for created labels
            auto_remove: Remove labels from replaced namespaces

        Returns:
            LabelUpdate describing what actually changed
        """
        current = self.get_current_labels()
        to_add, to_remove = resolve_label_changes(current, decisions)
        update = LabelUpdate()

        if auto_remove:
            for label in to_remove:
                try:
                    self.pr.remove_from_labels(label)
                    update.removed.append(label)
                except GithubException as e:
                    logger.warning(f"Failed to remove label {label}: {e}")
                    update.failed.append(label)

        for label in to_add:
            if create_missing and not self.ensure_label(label, color, description):
                update.failed.append(label)
                continue
            try:
                self.pr.add_to_labels(label)
                update.added.append(label)
            except GithubException as e:
                logger.warning(f"Failed to add label {label}: {e}")
                update.failed.append(label)

        logger.info(
            f"Labels added: {update.added or 'none'}, removed: {update.removed or 'none'}"
        )
        return update

    def upsert_comment(self, body: str) -> None:
        """Create or update the labeler's summary comment on the PR."""
        marked = f"{COMMENT_MARKER}\n{body}"
        for comment in self.pr.get_issue_comments():
            if comment.body and comment.body.startswith(COMMENT_MARKER):
                comment.edit(marked)
                return
        self.pr.create_issue_comment(marked)

    def delete_comment(self) -> bool:
        """Remove the summary comment if present."""
        for comment in self.pr.get_issue_comments():
            if comment.body and comment.body.startswith(COMMENT_MARKER):
                comment.delete()
                return True
        return False
