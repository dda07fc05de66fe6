from __future__ import annotations
from typing import Dict, NamedTuple, Optional


class ConsonantPair(NamedTuple):
	dental: str
	retroflex: str
	dental_char: str
	retroflex_char: str


# Latin transliteration collapses these dental/retroflex pairs onto one spelling.
# The capitalised spelling marks the retroflex.
DENTAL_RETROFLEX_PAIRS = (
	ConsonantPair("ta", "Ta", "ତ", "ଟ"),
	ConsonantPair("tha", "Tha", "ଥ", "ଠ"),
	ConsonantPair("da", "Da", "ଦ", "ଡ"),
	ConsonantPair("dha", "Dha", "ଧ", "ଢ"),
	ConsonantPair("na", "Na", "ନ", "ଣ"),
	ConsonantPair("la", "La", "ଲ", "ଳ"),
	ConsonantPair("sa", "Sa", "ସ", "ଷ"),
)

WORDS: Dict[str, str] = {
	# greetings and phrases
	"namaskara": "ନମସ୍କାର", "namaskar": "ନମସ୍କାର", "namaskaara": "ନମସ୍କାର",
	"bhala": "ଭଲ", "bhalo": "ଭଲ",
	"dhanyabad": "ଧନ୍ୟବାଦ", "dhanyabaad": "ଧନ୍ୟବାଦ", "dhanyawaad": "ଧନ୍ୟବାଦ",
	"kemiti": "କେମିତି", "kemite": "କେମିତି",
	"aachen": "ଆଛେନ୍", "achhen": "ଆଛେନ୍",
	"achi": "ଅଛି", "achhi": "ଅଛି",

	# pronouns
	"mu": "ମୁଁ", "mun": "ମୁଁ", "ami": "ଆମି",
	"tume": "ତୁମେ", "tumhe": "ତୁମେ", "tumar": "ତୁମର",
	"se": "ସେ", "sehi": "ସେହି", "taha": "ତାହା",
	"aame": "ଆମେ", "aamara": "ଆମର",

	# places and everyday nouns
	"ghar": "ଘର", "ghara": "ଘର", "school": "ସ୍କୁଲ", "college": "କଲେଜ",
	"office": "ଅଫିସ", "hospital": "ହସପିଟାଲ", "market": "ବଜାର", "bajar": "ବଜାର",
	"pani": "ପାଣି", "bhaat": "ଭାତ", "tarkari": "ତରକାରୀ",

	# single consonants, dental spelling
	"ka": "କ", "kha": "ଖ", "ga": "ଗ", "gha": "ଘ", "nga": "ଙ",
	"cha": "ଚ", "chha": "ଛ", "ja": "ଜ", "jha": "ଝ", "nja": "ଞ",
	"ta": "ତ", "tha": "ଥ", "da": "ଦ", "dha": "ଧ", "na": "ନ",
	"pa": "ପ", "pha": "ଫ", "ba": "ବ", "bha": "ଭ", "ma": "ମ",
	"ya": "ଯ", "ra": "ର", "la": "ଲ", "wa": "ୱ", "sha": "ଶ",
	"sa": "ସ", "ha": "ହ", "ksha": "କ୍ଷ", "gya": "ଜ୍ଞ",

	# retroflex, capitalised spelling
	"Ta": "ଟ", "Tha": "ଠ", "Da": "ଡ", "Dha": "ଢ", "Na": "ଣ",
	"La": "ଳ", "Sa": "ଷ", "Ya": "ୟ",

	# vowels
	"a": "ଅ", "aa": "ଆ", "i": "ଇ", "ii": "ଈ", "u": "ଉ", "uu": "ଊ",
	"e": "ଏ", "o": "ଓ", "au": "ଔ", "ai": "ଐ",
}


def lookup(word: str) -> Optional[str]:
	# Exact spelling first so capitalised retroflex forms stay reachable
	found = WORDS.get(word)
	if found is None:
		found = WORDS.get(word.lower())
	return found
