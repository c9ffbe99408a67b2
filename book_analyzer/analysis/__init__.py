from book_analyzer.analysis.analyzer import SemanticAnalyzer
from book_analyzer.analysis.base import BaseAnalyzer
from book_analyzer.analysis.factory import AnalyzerFactory

__all__ = ["AnalyzerFactory", "BaseAnalyzer", "SemanticAnalyzer"]
