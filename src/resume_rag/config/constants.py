"""Fixed constants that are not deployment knobs."""

TIKTOKEN_ENCODING = "cl100k_base"

# Chunk quality
# Letterless tokens up to this length (page numbers, years) are not content on their own
MAX_NUMERIC_TOKEN_LEN = 4
MIN_REPETITION_WORDS = 5
MAX_REPETITION_RATIO = 0.2
MINHASH_NUM_PERM = 128
NEAR_DUP_SIMILARITY_THRESHOLD = 0.9

# Characters the query refiner must not leave in a rewritten question
REFINER_FORBIDDEN_CHARS = "/*$#&@%^|\\<>{}[]~`"

CONTEXT_SEPARATOR = "\n\n"

STOPWORDS = frozenset(
    {
        "a", "about", "above", "after", "again", "against", "all", "am", "an",
        "and", "any", "are", "as", "at", "be", "because", "been", "before",
        "being", "below", "between", "both", "but", "by", "can", "could", "did",
        "do", "does", "doing", "down", "during", "each", "few", "for", "from",
        "further", "had", "has", "have", "having", "he", "her", "here", "hers",
        "herself", "him", "himself", "his", "how", "i", "if", "in", "into", "is",
        "it", "its", "itself", "just", "me", "more", "most", "my", "myself", "no",
        "nor", "not", "now", "of", "off", "on", "once", "only", "or", "other",
        "our", "ours", "ourselves", "out", "over", "own", "same", "she", "should",
        "so", "some", "such", "than", "that", "the", "their", "theirs", "them",
        "themselves", "then", "there", "these", "they", "this", "those",
        "through", "to", "too", "under", "until", "up", "very", "was", "we",
        "were", "what", "when", "where", "which", "while", "who", "whom", "why",
        "will", "with", "would", "you", "your", "yours", "yourself",
        "yourselves",
    }
)
