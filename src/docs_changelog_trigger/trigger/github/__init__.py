"""GitHub REST access for the dispatch trigger."""
