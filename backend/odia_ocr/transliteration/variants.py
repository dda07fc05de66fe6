from __future__ import annotations
import re
from typing import List, Tuple

# (from, to) substitutions applied case-insensitively across the whole word
CONSONANT_SWAPS: Tuple[Tuple[str, str], ...] = (
	("na", "Na"), ("Na", "na"),
	("ta", "Ta"), ("Ta", "ta"),
	("da", "Da"), ("Da", "da"),
	("dha", "Dha"), ("Dha", "dha"),
	("la", "La"), ("La", "la"),
	("sa", "Sa"), ("Sa", "sa"),
	("tha", "Tha"), ("Tha", "tha"),
	("sa", "sha"), ("sha", "sa"),
	("sha", "Sa"), ("Sa", "sha"),
	("ba", "va"), ("va", "ba"),
	("ya", "Ya"), ("Ya", "ya"),
)

CONJUNCT_SWAPS: Tuple[Tuple[str, str], ...] = (
	("ksh", "kSh"), ("kSh", "ksh"),
	("gny", "gy"), ("gy", "gny"),
	("ntr", "ntR"), ("ntR", "ntr"),
	("sth", "stH"), ("stH", "sth"),
	("nta", "nTa"), ("nTa", "nta"),
	("nda", "nDa"), ("nDa", "nda"),
	("nka", "Nka"), ("Nka", "nka"),
)

VOWEL_RULES: Tuple[Tuple[re.Pattern, str], ...] = (
	(re.compile(r"a(?![aeiou])"), "aa"),
	(re.compile(r"i(?![aeiou])"), "ii"),
	(re.compile(r"u(?![aeiou])"), "uu"),
	(re.compile(r"aa"), "a"),
	(re.compile(r"ii"), "i"),
	(re.compile(r"uu"), "u"),
)


def spelling_variants(word: str) -> List[str]:
	"""Alternate romanizations of word, in table order, without duplicates or word itself."""
	out: List[str] = []
	lowered = word.lower()
	for frm, to in CONSONANT_SWAPS + CONJUNCT_SWAPS:
		if frm.lower() in lowered:
			out.append(re.sub(re.escape(frm), to, word, flags=re.IGNORECASE))
	for pattern, repl in VOWEL_RULES:
		out.append(pattern.sub(repl, word))
	seen = {word}
	unique: List[str] = []
	for variant in out:
		if variant not in seen:
			seen.add(variant)
			unique.append(variant)
	return unique
