"""Domain services - pure transforms over an immutable data snapshot."""

from .aggregator import LedgerAggregator
from .aging import AgingEngine
from .classifier import AccountClassifier
from .dimensions import DimensionAnalyzer
from .profitability import ProfitabilityAnalyzer
from .ratios import RatioCalculator
from .statements import StatementBuilder
from .variance import VarianceAnalyzer
