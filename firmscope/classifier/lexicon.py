"""Static name and term tables used by the firm-size classifier.

All entries are lowercase.  These are plain data, never mutated and never
read from the environment.
"""

from __future__ import annotations

KNOWN_BIGLAW_NAMES: tuple[str, ...] = (
    "skadden", "cravath", "kirkland", "latham", "sullivan & cromwell",
    "sullivan cromwell", "wachtell", "davis polk", "simpson thacher",
    "paul weiss", "cleary gottlieb", "weil gotshal", "gibson dunn",
    "jones day", "sidley austin", "morgan lewis", "white & case",
    "white case", "hogan lovells", "baker mckenzie", "baker & mckenzie",
    "norton rose", "clifford chance", "allen & overy", "allen overy",
    "linklaters", "freshfields", "herbert smith", "dentons",
    "dla piper", "greenberg traurig", "holland & knight", "holland knight",
    "king & spalding", "king spalding", "mayer brown", "milbank",
    "proskauer", "ropes & gray", "ropes gray", "debevoise",
    "willkie farr", "quinn emanuel", "covington", "cooley",
    "goodwin procter", "goodwin", "orrick", "shearman",
    "arnold & porter", "arnold porter", "akin gump", "morrison foerster",
    "mofo", "winston & strawn", "winston strawn", "dechert",
    "reed smith", "squire patton", "pillsbury", "katten muchin",
)

# 500+ attorney firms outside the top-tier list; these mark an outlier only.
KNOWN_MEGA_FIRMS: tuple[str, ...] = (
    "morgan & morgan", "morgan and morgan", "morganandmorgan",
    "littler mendelson", "littler", "jackson lewis", "ogletree deakins",
    "fisher phillips", "seyfarth shaw", "seyfarth",
    "baker donelson", "polsinelli", "husch blackwell",
    "foley & lardner", "foley lardner", "mcguirewoods",
    "bryan cave", "thompson hine", "faegre drinker",
)

PRESTIGE_TERMS: tuple[str, ...] = (
    "am law", "amlaw", "am law 100", "am law 200",
    "vault", "chambers", "legal 500", "nlj 500",
    "global 100", "magic circle", "white shoe",
)
