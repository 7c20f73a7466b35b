import sys

from etf_matcher_vectors.cli import main

sys.exit(main())
