"""Search defaults: target phrase, accepted hashes and CLI settings."""

# Phrase the anagrams are built from (whitespace is ignored)
DEFAULT_PHRASE = "poultry outwits ants"

# MD5 digests of the anagrams we are looking for
DEFAULT_HASHES: tuple[str, ...] = (
    "e4820b45d2277f3844eac66c903e84be",
    "23170acc097c24edb98fc5488ab033fe",
    "665e5bcb0c20062fe8abaaf4628bb154",
)

DEFAULT_DICTIONARY_PATH = "wordlist"
DEFAULT_OUTPUT_FILE = "anagrams"
DEFAULT_MAX_WORDS = 4
DEFAULT_MIN_WORD_LEN = 2

# Branches shorter than this many characters are submitted to the pool,
# deeper ones recurse inline on the worker that reached them
DEFAULT_FAN_OUT_DEPTH = 3

# Root sentinel of the trie. Never compared against real input.
HEAD_CHARACTER = "_"
