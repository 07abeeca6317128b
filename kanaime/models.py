"""
Pydantic models for kanaime results.

These are what the service hands back to a host: suggestion lists and
the outcome of initialization. They serialize straight to JSON, which
is what the transport adapter and the CLI send out.

Usage:
    from kanaime.models import SuggestionResult
    
    result = service.suggest(text="きょうはかんじ")
    print(result.model_dump_json())
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class SuggestionResult(BaseModel):
    """
    Candidates suggested for one reading.
    
    Always a reordering/truncation of a single dictionary entry.
    """
    reading: Optional[str] = Field(None, description="Hiragana reading that was looked up")
    candidates: List[str] = Field(default_factory=list, description="Candidates, best first")
    
    @classmethod
    def empty(cls, reading: Optional[str] = None) -> "SuggestionResult":
        """Result with no candidates."""
        return cls(reading=reading, candidates=[])
    
    def __len__(self) -> int:
        return len(self.candidates)
    
    def __bool__(self) -> bool:
        return bool(self.candidates)


class InitError(BaseModel):
    """Why initialization failed."""
    where: str = Field(..., description="Stage that failed: 'read', 'decode' or 'build'")
    cause: str = Field(..., description="Machine-readable cause code")
    message: str = Field(..., description="Human-readable description")
    preview: str = Field("", description="First characters of the rejected payload")
    
    @classmethod
    def from_format_error(cls, error: Exception) -> "InitError":
        """Create an InitError from a FormatError."""
        return cls(
            where=getattr(error, 'stage', 'init'),
            cause=getattr(error, 'cause', 'unknown'),
            message=str(error),
            preview=getattr(error, 'preview', ''),
        )


class InitReport(BaseModel):
    """
    Outcome of SuggestionService.initialize().
    
    Either ``ready`` with the number of dictionary entries, or not
    ready with an ``error``.
    """
    ready: bool = Field(..., description="True once the dictionary is loaded")
    entries: int = Field(0, description="Number of readings in the dictionary")
    error: Optional[InitError] = Field(None, description="Failure details when not ready")
