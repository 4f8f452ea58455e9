"""
Resolution Pipeline

Loads a person YAML file and resolves it: projects are imported, merged and
ordered; citations are fetched and turned into display text. The resolved
record is cached under a fingerprint of the input file, and a cache hit skips
every fetch.
"""

import time
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from vitae.contexts.citations.resolver import FETCH_WORKERS, resolve_citations
from vitae.contexts.citations.transport import Transport
from vitae.contexts.intake.logger import _log_warning, log_cache_hit, log_resolution_result
from vitae.contexts.intake.person_data_structure import Person
from vitae.contexts.projects.interpreter import DirectiveInterpreter, ProjectSource
from vitae.contexts.projects.project_data_structures import RawProject, SetSortOrder, SortPolicy
from vitae.utils.cache import fingerprint
from vitae.utils.exceptions import InputError


class ResolvedPersonCache(Protocol):
    def get(self, key: str) -> Optional[Dict[str, Any]]: ...

    def put(self, key: str, data: Dict[str, Any]) -> None: ...


def parse_person_yaml(content: str) -> Person:
    """
    Parse person YAML text.

    Raises:
        InputError: If the text is not valid YAML or not a person record
    """
    try:
        data = OmegaConf.to_container(OmegaConf.create(content), resolve=False)
    except (yaml.YAMLError, OmegaConfBaseException) as e:
        raise InputError(f"Input is not valid YAML: {e}") from e
    return Person.from_dict(data)


def resolve_person(
    person: Person,
    project_source: ProjectSource,
    transport: Transport,
    max_workers: int = FETCH_WORKERS,
) -> Person:
    """
    Resolve projects and citations of a person.

    Projects are interpreted first (imports are sequential), then all citations
    are fetched as one concurrent batch. Any failure aborts the run.

    Returns:
        A new Person whose projects are the final ordered entries followed by a
        manual sort directive, and whose citations are plain text
    """
    start = time.time()
    interpreter = DirectiveInterpreter(project_source, viewer=person.github_username)
    selection = interpreter.run(person.projects)

    citations = resolve_citations(person.references, person.publications, transport, max_workers)

    log_resolution_result(person.name, len(selection.projects), len(citations.references), time.time() - start)
    return replace(
        person,
        projects=[RawProject(project) for project in selection.projects]
        + [SetSortOrder(SortPolicy.MANUAL)],
        references=dict(citations.references),
        publications=list(citations.publications),
    )


def build_person(
    input_path: Path,
    cache: ResolvedPersonCache,
    project_source: ProjectSource,
    transport: Transport,
    max_workers: int = FETCH_WORKERS,
) -> Person:
    """
    Load and resolve the person in `input_path`, going through the cache.

    Raises:
        InputError: If the input cannot be read or parsed
        NetworkError, FormatError, ConfigError: From resolution
    """
    try:
        content = input_path.read_bytes()
    except OSError as e:
        raise InputError(f"Cannot read input file {input_path}: {e}") from e

    key = fingerprint(content)
    cached = cache.get(key)
    if cached is not None:
        log_cache_hit(key, input_path)
        return Person.from_dict(cached)

    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InputError(f"Input file {input_path} is not UTF-8: {e}") from e

    person = parse_person_yaml(text)
    resolved = resolve_person(person, project_source, transport, max_workers)

    try:
        cache.put(key, resolved.to_dict())
    except OSError as e:
        _log_warning(f"Could not write cache entry for {input_path}: {e}")
    return resolved
