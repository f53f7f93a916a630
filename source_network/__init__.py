from .datatypes import CorpusError, Document, Edge, EdgeSet
from .preprocessing import as_corpus, is_blank, tokenize, validate_corpus, TokenSets
from .features import TfidfModel, Vocabulary, build_vocabulary, document_frequencies, jaccard
from .graphing import (iter_pairs, build_network_fulltext, build_network_bow, build_network_jaccard,
                       build_network_tfidf_cosine, sweep, MATCHERS, to_networkx, graph_stats)
from .extraction import AuthorOverride, ExtractionError, extract_corpus
from .writer import write_edge_list, write_dataset, read_dataset
from .pipeline import build_networks, run_corpus, run
