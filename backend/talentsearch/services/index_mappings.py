"""
Elasticsearch mappings for the jobs, applicants and companies indices.
"""
from talentsearch.services.search_types import DocumentKind

_ENGLISH_TEXT = {"type": "text", "analyzer": "english"}
_TEXT_WITH_KEYWORD = {"type": "text", "fields": {"keyword": {"type": "keyword"}}}
# Exact values for filters, analysed text for free-text search
_KEYWORD_WITH_TEXT = {"type": "keyword", "fields": {"text": _ENGLISH_TEXT}}

JOBS_MAPPING = {
    "properties": {
        "position": {**_ENGLISH_TEXT, "fields": {"keyword": {"type": "keyword"}}},
        "company": {**_ENGLISH_TEXT, "fields": {"keyword": {"type": "keyword"}}},
        "description": _ENGLISH_TEXT,
        "requirements": _ENGLISH_TEXT,
        "responsibilities": _ENGLISH_TEXT,
        "location": {
            "properties": {
                "city": _TEXT_WITH_KEYWORD,
                "state": _TEXT_WITH_KEYWORD,
                "country": _TEXT_WITH_KEYWORD,
                "remote": {"type": "boolean"},
                "type": {"type": "keyword"},
            },
        },
        "salary": {
            "properties": {
                "min": {"type": "float"},
                "max": {"type": "float"},
                "currency": {"type": "keyword"},
                "period": {"type": "keyword"},
            },
        },
        "job_type": {"type": "keyword"},
        "experience_level": {"type": "keyword"},
        "categories": _KEYWORD_WITH_TEXT,
        "tags": _KEYWORD_WITH_TEXT,
        "created_by": {"type": "keyword"},
        "created_at": {"type": "date"},
        "updated_at": {"type": "date"},
    },
}

APPLICANTS_MAPPING = {
    "properties": {
        "user_id": {"type": "keyword"},
        "headline": _ENGLISH_TEXT,
        "summary": _ENGLISH_TEXT,
        "skills": {
            "type": "nested",
            "properties": {
                "name": _TEXT_WITH_KEYWORD,
                "level": {"type": "keyword"},
            },
        },
        "work_experience": {
            "type": "nested",
            "properties": {
                "position": _ENGLISH_TEXT,
                "company": _ENGLISH_TEXT,
                "description": _ENGLISH_TEXT,
            },
        },
        "education": {
            "type": "nested",
            "properties": {
                "institution": _ENGLISH_TEXT,
                "degree": _ENGLISH_TEXT,
                "field": _ENGLISH_TEXT,
            },
        },
        "preferred_job_types": {"type": "keyword"},
        "preferred_locations": {"type": "keyword"},
        "preferred_industries": {"type": "keyword"},
        "is_remote_only": {"type": "boolean"},
        "created_at": {"type": "date"},
        "updated_at": {"type": "date"},
    },
}

COMPANIES_MAPPING = {
    "properties": {
        "name": {**_ENGLISH_TEXT, "fields": {"keyword": {"type": "keyword"}}},
        "description": _ENGLISH_TEXT,
        "industry": {"type": "keyword"},
        "location": {
            "properties": {
                "city": _TEXT_WITH_KEYWORD,
                "state": _TEXT_WITH_KEYWORD,
                "country": _TEXT_WITH_KEYWORD,
            },
        },
        "website": {"type": "keyword"},
        "size": {"type": "keyword"},
        "founded": {"type": "integer"},
        "specialties": {"type": "keyword"},
        "created_by": {"type": "keyword"},
        "created_at": {"type": "date"},
        "updated_at": {"type": "date"},
    },
}

MAPPINGS = {
    DocumentKind.JOBS: JOBS_MAPPING,
    DocumentKind.APPLICANTS: APPLICANTS_MAPPING,
    DocumentKind.COMPANIES: COMPANIES_MAPPING,
}
