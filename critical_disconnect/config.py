"""
Run configuration for the analysis.
Validated with pydantic so bad CLI or dashboard input fails before any work is done.
"""

from pathlib import Path  # filesystem paths
from typing import List, Optional  # type hints

from pydantic import BaseModel, Field, field_validator  # validated settings model

from .pipeline import DEFAULT_EXCLUDED_GENRES  # always-excluded primary genres


class PipelineConfig(BaseModel):
	"""Settings shared by the CLI and the dashboard."""
	data_path: Path  # Rotten Tomatoes movies CSV
	top_n: int = Field(5000, gt=0)  # size of the working dataset
	min_group_size: int = Field(100, gt=0)  # smallest genre/decade group that is reported
	list_size: int = Field(10, gt=0)  # length of the critics/audiences favor lists
	excluded_genres: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_GENRES))  # primary genres to drop
	tie_break: bool = True  # rank by critic count when audience counts tie
	export_dir: Optional[Path] = None  # where to write CSV tables, if anywhere

	@field_validator('excluded_genres')
	@classmethod
	def keep_default_exclusions(cls, genres: List[str]) -> List[str]:
		"""User genres add to the defaults; Documentary can never be re-included."""
		merged = list(DEFAULT_EXCLUDED_GENRES)
		for genre in genres:
			genre = genre.strip()
			if genre and genre not in merged:
				merged.append(genre)
		return merged
