from .editor import EditorSession
from .engine import MAX_SUGGESTIONS, Suggestion, TransliterationEngine, merge_candidates
from .providers import (
	CandidateProvider,
	DentalRetroflexProvider,
	FuzzyVariantProvider,
	GoogleInputToolsProvider,
	LexiconProvider,
	local_providers,
)
from .words import WordSpan, contains_odia, current_word

__all__ = [
	"CandidateProvider",
	"DentalRetroflexProvider",
	"EditorSession",
	"FuzzyVariantProvider",
	"GoogleInputToolsProvider",
	"LexiconProvider",
	"MAX_SUGGESTIONS",
	"Suggestion",
	"TransliterationEngine",
	"WordSpan",
	"contains_odia",
	"current_word",
	"local_providers",
	"merge_candidates",
]
