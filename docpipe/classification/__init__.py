from docpipe.classification.base import BaseClassificationOracle
from docpipe.classification.factory import ClassificationOracleFactory
from docpipe.classification.oracle import ClassificationOracle

__all__ = ["BaseClassificationOracle", "ClassificationOracle", "ClassificationOracleFactory"]
