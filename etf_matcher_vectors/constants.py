# etf_matcher_vectors/constants.py

__version__ = "0.1.0"

# Remote host for every ETF Matcher data file
BASE_URL = "https://etfmatcher.com/data/"

# Well-known resources under BASE_URL
CATALOG_MANIFEST_FILENAME = "ticker_vector_configs.toml"
SYMBOL_MAP_FILENAME = "ticker_symbol_map.flatbuffers.bin"

# Manifest table holding one sub-table per configuration key
CATALOG_SECTION = "ticker_vector_config"

DEFAULT_CONFIG_KEY = "default"

DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_HTTP_CONCURRENCY = 8
DEFAULT_USER_AGENT = f"etf-matcher-vectors/{__version__}"

CONFIG_PATH_ENV = "ETF_MATCHER_CONFIG_PATH"
