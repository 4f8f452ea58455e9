"""
GitHub Project Source

Fetches project records from the GitHub REST API, either every repository
visible for an account or an explicit list of `owner/repo` names.

Role assignment: a repository owned by the viewer is tagged as owner,
anything else as contributor.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests
from dotenv import load_dotenv

from vitae.contexts.projects.logger import _log_debug, _log_warning
from vitae.contexts.projects.project_data_structures import (
    LanguageStat,
    Project,
    ProjectRole,
    sort_languages,
)
from vitae.utils.exceptions import ConfigError, NetworkError

load_dotenv()
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
HTTP_TIMEOUT = float(os.getenv("VITAE_HTTP_TIMEOUT", "30"))
USER_AGENT = os.getenv("VITAE_USER_AGENT", "vitae/0.1")
FETCH_WORKERS = int(os.getenv("VITAE_FETCH_WORKERS", "8"))

PAGE_SIZE = 100


def language_stats(language_bytes: Dict[str, int]) -> List[LanguageStat]:
    """Convert GitHub's language byte counts to percentages, largest first."""
    total = sum(language_bytes.values())
    if total <= 0:
        return []
    stats = [
        LanguageStat(language=language, percentage=count / total * 100.0)
        for language, count in language_bytes.items()
    ]
    return sort_languages(stats)


def split_repo_name(full_name: str) -> Optional[Tuple[str, str]]:
    """Split 'owner/repo' into its parts, or None when the name has another shape."""
    parts = full_name.split("/")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None
    return parts[0], parts[1]


def sum_contributions(stats: List[Dict[str, Any]], login: str) -> Tuple[int, int, int]:
    """Total (additions, deletions, commits) over all weeks for one contributor."""
    additions = deletions = commits = 0
    for contributor in stats:
        author = contributor.get("author") or {}
        if author.get("login") != login:
            continue
        for week in contributor.get("weeks", []):
            additions += week.get("a", 0)
            deletions += week.get("d", 0)
            commits += week.get("c", 0)
    return additions, deletions, commits


class GitHubProjectSource:
    """Project source adapter backed by the GitHub REST API."""

    def __init__(
        self,
        api_url: str = GITHUB_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = HTTP_TIMEOUT,
        max_workers: int = FETCH_WORKERS,
    ):
        self.api_url = api_url
        self.session = session or requests.Session()
        self.session.headers.update(
            {"Accept": "application/vnd.github+json", "User-Agent": USER_AGENT}
        )
        self.timeout = timeout
        self.max_workers = max_workers

    # -- transport -----------------------------------------------------------

    def _request(self, url: str, token: Optional[str], params: Optional[dict] = None) -> requests.Response:
        if not url.startswith("http"):
            url = f"{self.api_url}{url}"
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            response = self.session.get(url, headers=headers, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError("GitHub request failed", url=url, original_error=e) from e
        return response

    def _get_json(self, url: str, token: Optional[str], params: Optional[dict] = None) -> Any:
        return self._request(url, token, params).json()

    def _get_paginated(self, url: str, token: Optional[str], params: dict) -> List[Any]:
        items = []
        next_url: Optional[str] = url
        next_params: Optional[dict] = {**params, "per_page": PAGE_SIZE}
        while next_url:
            response = self._request(next_url, token, next_params)
            items.extend(response.json())
            next_url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            next_params = None
        return items

    def _viewer_login(self, token: str) -> str:
        return self._get_json("/user", token)["login"]

    # -- record building -----------------------------------------------------

    def _languages(self, repo: Dict[str, Any], token: Optional[str]) -> List[LanguageStat]:
        url = repo.get("languages_url") or f"/repos/{repo['full_name']}/languages"
        return language_stats(self._get_json(url, token))

    def _contributions(
        self, repo: Dict[str, Any], token: Optional[str], viewer: str
    ) -> Tuple[Optional[int], Optional[int], Optional[int]]:
        response = self._request(f"/repos/{repo['full_name']}/stats/contributors", token)
        if response.status_code != 200 or not response.content:
            # 202: GitHub is still computing statistics for this repository
            _log_debug(f"No contributor statistics yet for {repo['full_name']}")
            return None, None, None
        return sum_contributions(response.json(), viewer)

    def _to_project(
        self,
        repo: Dict[str, Any],
        languages: List[LanguageStat],
        viewer: Optional[str],
        contributions: Tuple[Optional[int], Optional[int], Optional[int]] = (None, None, None),
    ) -> Project:
        owner = repo["owner"]["login"]
        additions, deletions, commits = contributions
        return Project(
            name=repo["name"],
            description=repo.get("description"),
            url=repo.get("html_url"),
            stars=repo.get("stargazers_count"),
            forks=repo.get("forks_count"),
            active=not repo.get("archived", False),
            owner=owner,
            commits=commits,
            additions=additions,
            deletions=deletions,
            languages=languages,
            tags=list(repo.get("topics") or []),
            role=ProjectRole.OWNER if viewer and owner.lower() == viewer.lower() else ProjectRole.CONTRIBUTOR,
        )

    # -- adapter interface ---------------------------------------------------

    def list_owned(
        self, ignore_forks: bool, token: Optional[str] = None, viewer: Optional[str] = None
    ) -> List[Project]:
        """
        List every repository of the viewer's account.

        Args:
            ignore_forks: Skip repositories that are forks
            token: Optional API token
            viewer: Account login; resolved from the token when omitted

        Raises:
            ConfigError: If neither a viewer nor a token is available
            NetworkError: If any request fails
        """
        if viewer is None:
            if token is None:
                raise ConfigError(
                    "Importing owned GitHub projects needs a 'github' contact or an import token"
                )
            viewer = self._viewer_login(token)

        if token is not None:
            repos = self._get_paginated("/user/repos", token, {"affiliation": "owner,collaborator"})
        else:
            repos = self._get_paginated(f"/users/{viewer}/repos", token, {"type": "all"})

        if ignore_forks:
            repos = [repo for repo in repos if not repo.get("fork")]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            languages = list(executor.map(lambda repo: self._languages(repo, token), repos))

        return [
            self._to_project(repo, langs, viewer) for repo, langs in zip(repos, languages)
        ]

    def list_by_names(
        self, names: Iterable[str], token: Optional[str] = None, viewer: Optional[str] = None
    ) -> List[Project]:
        """
        Fetch the given `owner/repo` repositories, in the given order.

        Names without an owner part are skipped with a warning. When a viewer is
        known their commit, addition and deletion totals are attached.
        """
        pairs = []
        for full_name in names:
            pair = split_repo_name(full_name)
            if pair is None:
                _log_warning(f"Skipping '{full_name}': expected 'owner/repo'")
                continue
            pairs.append(pair)

        def fetch_one(pair: Tuple[str, str]) -> Project:
            owner, name = pair
            repo = self._get_json(f"/repos/{owner}/{name}", token)
            languages = self._languages(repo, token)
            contributions = (
                self._contributions(repo, token, viewer) if viewer else (None, None, None)
            )
            return self._to_project(repo, languages, viewer, contributions)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(fetch_one, pairs))
