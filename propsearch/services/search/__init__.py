"""Search pipeline services"""

from .dispatcher import DispatchPlan, build_dispatch_parameters
from .intent_classifier import IntentClassifier, classify, lease_classifier
from .lease_extractor import LeaseFilterExtractor
from .param_extractor import ParameterExtractor, filters_from_payload
from .post_processor import SORT_FIELD_MAP, paginate, post_process, sign_resource_urls, sort_rows
from .response_sanitizer import isolate_json_object, parse_model_json, strip_code_fences
from .search_orchestrator import LeaseSearchOrchestrator, PropertySearchOrchestrator

__all__ = [
    "DispatchPlan",
    "build_dispatch_parameters",
    "IntentClassifier",
    "classify",
    "lease_classifier",
    "LeaseFilterExtractor",
    "ParameterExtractor",
    "filters_from_payload",
    "SORT_FIELD_MAP",
    "paginate",
    "post_process",
    "sign_resource_urls",
    "sort_rows",
    "isolate_json_object",
    "parse_model_json",
    "strip_code_fences",
    "LeaseSearchOrchestrator",
    "PropertySearchOrchestrator",
]
