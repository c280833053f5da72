"""Persistence boundary for match records."""

from repositories.json_source import load_matches_json, parse_match
from repositories.match_repository import MatchRepository, match_to_record

__all__ = ["MatchRepository", "load_matches_json", "match_to_record", "parse_match"]
