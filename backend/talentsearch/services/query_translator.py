"""
Translate SearchQuery and recommendation queries into the native query of
each backend: Elasticsearch request bodies for the primary index, and
SQLAlchemy criteria for the document store.

Both translations apply the same filter semantics, so the two backends
return the same matching documents for a query; only ranking differs.
"""
import re
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import String, and_, column, false, func, literal, or_, select, text

from talentsearch.models import ApplicantProfile, Job
from talentsearch.services.search_types import (
    ApplicantFilters,
    CandidateRecommendationQuery,
    JobFilters,
    JobRecommendationQuery,
    SearchQuery,
)

JOB_TEXT_FIELDS = [
    "position^3",
    "company^2",
    "description",
    "requirements",
    "responsibilities",
    "categories.text",
    "tags.text",
]

RELEVANCE_SORT = [
    {"_score": {"order": "desc"}},
    {"created_at": {"order": "desc"}},
]

_TERM_RE = re.compile(r"\w+")
_EDGE_PUNCTUATION = ".,;:!?()[]{}\"'"


def search_terms(free_text: str) -> list[str]:
    return _TERM_RE.findall(free_text)


@dataclass
class StoreQuery:
    criteria: list = field(default_factory=list)
    order_by: list = field(default_factory=list)
    offset: int = 0
    limit: int | None = None


# ----------------------------------------------------------------------
# Elasticsearch
# ----------------------------------------------------------------------


def _nested(path: str, query: dict[str, Any]) -> dict[str, Any]:
    return {"nested": {"path": path, "query": query, "score_mode": "max"}}


def _bool_query(
    must: list[dict] | None = None,
    filters: list[dict] | None = None,
    should: list[dict] | None = None,
) -> dict[str, Any]:
    clauses: dict[str, Any] = {}
    if must:
        clauses["must"] = must
    if should:
        clauses["should"] = should
        clauses["minimum_should_match"] = 1
    if filters:
        clauses["filter"] = filters
    if not clauses:
        return {"match_all": {}}
    return {"bool": clauses}


LOCATION_FIELDS = ["city", "state", "country"]


def _location_clause(location: str) -> dict[str, Any]:
    # All words of the location must match within a single field
    return {
        "bool": {
            "should": [
                {"match": {f"location.{name}": {"query": location, "operator": "and"}}}
                for name in LOCATION_FIELDS
            ],
            "minimum_should_match": 1,
        }
    }


def _job_filter_clauses(filters: JobFilters) -> list[dict[str, Any]]:
    clauses: list[dict[str, Any]] = []
    if filters.job_type:
        clauses.append({"term": {"job_type": filters.job_type}})
    if filters.experience_level:
        clauses.append({"term": {"experience_level": filters.experience_level}})
    if filters.remote is not None:
        clauses.append({"term": {"location.remote": filters.remote}})
    if filters.location_type:
        clauses.append({"term": {"location.type": filters.location_type}})
    if filters.location:
        clauses.append(_location_clause(filters.location))
    if filters.min_salary is not None:
        clauses.append({"range": {"salary.min": {"gte": filters.min_salary}}})
    if filters.max_salary is not None:
        clauses.append({"range": {"salary.max": {"lte": filters.max_salary}}})
    if filters.categories:
        clauses.append({"terms": {"categories": filters.categories}})
    return clauses


def job_index_query(query: SearchQuery) -> dict[str, Any]:
    must = []
    if query.free_text:
        must.append({
            "multi_match": {
                "query": query.free_text,
                "fields": JOB_TEXT_FIELDS,
                "fuzziness": "AUTO",
            }
        })
    return {
        "query": _bool_query(must=must, filters=_job_filter_clauses(query.filters)),
        "sort": RELEVANCE_SORT,
        "from_": query.offset,
        "size": query.page_size,
        "track_total_hits": True,
    }


def _applicant_text_clause(free_text: str) -> dict[str, Any]:
    # skills, work_experience and education are nested, so each needs its own
    # nested clause; a top-level multi_match would never see their sub-fields.
    return {
        "bool": {
            "should": [
                {"multi_match": {"query": free_text, "fields": ["headline^3", "summary^2"], "fuzziness": "AUTO"}},
                _nested("skills", {"match": {"skills.name": {"query": free_text, "fuzziness": "AUTO", "boost": 3}}}),
                _nested("work_experience", {
                    "multi_match": {
                        "query": free_text,
                        "fields": ["work_experience.position^2", "work_experience.company"],
                        "fuzziness": "AUTO",
                    }
                }),
                _nested("education", {"match": {"education.field": {"query": free_text, "fuzziness": "AUTO"}}}),
            ],
            "minimum_should_match": 1,
        }
    }


def _applicant_filter_clauses(filters: ApplicantFilters) -> list[dict[str, Any]]:
    clauses: list[dict[str, Any]] = []
    if filters.skills:
        clauses.append(_nested("skills", {"terms": {"skills.name.keyword": filters.skills}}))
    if filters.job_types:
        clauses.append({"terms": {"preferred_job_types": filters.job_types}})
    if filters.remote is not None:
        clauses.append({"term": {"is_remote_only": filters.remote}})
    return clauses


def applicant_index_query(query: SearchQuery) -> dict[str, Any]:
    must = [_applicant_text_clause(query.free_text)] if query.free_text else []
    return {
        "query": _bool_query(must=must, filters=_applicant_filter_clauses(query.filters)),
        "sort": RELEVANCE_SORT,
        "from_": query.offset,
        "size": query.page_size,
        "track_total_hits": True,
    }


def job_recommendation_index_query(rec: JobRecommendationQuery) -> dict[str, Any]:
    should = []
    if rec.skills:
        should.append({
            "multi_match": {
                "query": " ".join(rec.skills),
                "fields": ["requirements^3", "description", "responsibilities"],
                "type": "cross_fields",
                "operator": "or",
            }
        })
    if rec.titles:
        should.append({
            "multi_match": {
                "query": " ".join(rec.titles),
                "fields": ["position^3"],
                "type": "best_fields",
                "fuzziness": "AUTO",
            }
        })
    filters = []
    if rec.remote_only:
        filters.append({"term": {"location.remote": True}})
    if rec.job_types:
        filters.append({"terms": {"job_type": rec.job_types}})
    return {
        "query": _bool_query(should=should, filters=filters),
        "sort": RELEVANCE_SORT,
        "size": rec.limit,
    }


def candidate_recommendation_index_query(rec: CandidateRecommendationQuery) -> dict[str, Any]:
    should = []
    if rec.requirements:
        should.append(_nested("skills", {
            "multi_match": {
                "query": " ".join(rec.requirements),
                "fields": ["skills.name^3"],
                "type": "best_fields",
            }
        }))
    experience_text = " ".join([rec.position, *rec.responsibilities]).strip()
    if experience_text:
        should.append(_nested("work_experience", {
            "multi_match": {
                "query": experience_text,
                "fields": ["work_experience.position^3", "work_experience.description"],
                "type": "best_fields",
            }
        }))
    filters = []
    if rec.exclude_remote_only:
        filters.append({"term": {"is_remote_only": False}})
    return {
        "query": _bool_query(should=should, filters=filters),
        "sort": RELEVANCE_SORT,
        "size": rec.limit,
    }


# ----------------------------------------------------------------------
# Document store
# ----------------------------------------------------------------------

_NEWEST_JOBS = [Job.created_at.desc(), Job.id.desc()]
_NEWEST_APPLICANTS = [ApplicantProfile.created_at.desc(), ApplicantProfile.id.desc()]


def _json_elements(json_column):
    return func.json_each(json_column).table_valued(column("value", String))


def _json_array_contains_any(model, json_column, values: list[str]):
    """True when a JSON string array shares at least one element with values."""
    elements = _json_elements(json_column)
    return (
        select(elements.c.value)
        .where(elements.c.value.in_(values))
        .correlate(model.__table__)
        .exists()
    )


def _json_array_icontains(model, json_column, term: str):
    """True when any element of a JSON string array contains term, ignoring case."""
    elements = _json_elements(json_column)
    return (
        select(elements.c.value)
        .where(elements.c.value.icontains(term, autoescape=True))
        .correlate(model.__table__)
        .exists()
    )


def _json_objects_icontains(model, json_column, keys: list[str], term: str):
    """True when any listed key of any object in a JSON array contains term."""
    elements = _json_elements(json_column)
    matches = [
        func.json_extract(elements.c.value, f"$.{key}", type_=String).icontains(term, autoescape=True)
        for key in keys
    ]
    return (
        select(elements.c.value)
        .where(or_(*matches))
        .correlate(model.__table__)
        .exists()
    )


def _json_objects_key_in(model, json_column, key: str, values: list[str]):
    elements = _json_elements(json_column)
    extracted = func.json_extract(elements.c.value, f"$.{key}", type_=String)
    return (
        select(elements.c.value)
        .where(extracted.in_(values))
        .correlate(model.__table__)
        .exists()
    )


def _fts_expression(terms: list[str]) -> str:
    return " OR ".join(f'"{term}"' for term in terms)


def _job_text_criterion(free_text: str, full_text: bool):
    terms = search_terms(free_text)
    if not terms:
        return false()
    if full_text:
        return text(
            "jobs.rowid IN (SELECT rowid FROM jobs_fts WHERE jobs_fts MATCH :job_terms)"
        ).bindparams(job_terms=_fts_expression(terms))
    matches = []
    for term in terms:
        matches.extend([
            Job.position.icontains(term, autoescape=True),
            Job.company.icontains(term, autoescape=True),
            Job.description.icontains(term, autoescape=True),
            _json_array_icontains(Job, Job.requirements, term),
            _json_array_icontains(Job, Job.responsibilities, term),
            _json_array_icontains(Job, Job.categories, term),
            _json_array_icontains(Job, Job.tags, term),
        ])
    return or_(*matches)


def _has_word(column, word: str):
    """True when word appears in column as a whole word, ignoring case."""
    lowered = func.lower(column, type_=String)
    normalized = func.replace(func.replace(lowered, ",", " ", type_=String), "-", " ", type_=String)
    return (" " + normalized + " ").contains(f" {word.lower()} ", autoescape=True)


def _location_criterion(location: str):
    words = search_terms(location)
    if not words:
        return false()
    columns = [Job.location_city, Job.location_state, Job.location_country]
    return or_(*[and_(*[_has_word(col, word) for word in words]) for col in columns])


def _job_filter_criteria(filters: JobFilters) -> list:
    criteria = []
    if filters.job_type:
        criteria.append(Job.job_type == filters.job_type)
    if filters.experience_level:
        criteria.append(Job.experience_level == filters.experience_level)
    if filters.remote is not None:
        criteria.append(Job.location_remote.is_(filters.remote))
    if filters.location_type:
        criteria.append(Job.location_type == filters.location_type)
    if filters.location:
        criteria.append(_location_criterion(filters.location))
    if filters.min_salary is not None:
        criteria.append(Job.salary_min >= filters.min_salary)
    if filters.max_salary is not None:
        criteria.append(Job.salary_max <= filters.max_salary)
    if filters.categories:
        criteria.append(_json_array_contains_any(Job, Job.categories, filters.categories))
    return criteria


def job_store_query(query: SearchQuery, full_text: bool = True) -> StoreQuery:
    criteria = _job_filter_criteria(query.filters)
    if query.free_text:
        criteria.append(_job_text_criterion(query.free_text, full_text))
    return StoreQuery(
        criteria=criteria,
        order_by=_NEWEST_JOBS,
        offset=query.offset,
        limit=query.page_size,
    )


def _applicant_text_criterion(free_text: str, full_text: bool):
    terms = search_terms(free_text)
    if not terms:
        return false()
    if full_text:
        return text(
            "applicant_profiles.rowid IN "
            "(SELECT rowid FROM applicants_fts WHERE applicants_fts MATCH :applicant_terms)"
        ).bindparams(applicant_terms=_fts_expression(terms))
    matches = []
    for term in terms:
        matches.extend([
            ApplicantProfile.headline.icontains(term, autoescape=True),
            ApplicantProfile.summary.icontains(term, autoescape=True),
            _json_objects_icontains(ApplicantProfile, ApplicantProfile.skills, ["name"], term),
            _json_objects_icontains(
                ApplicantProfile, ApplicantProfile.work_experience, ["position", "company"], term
            ),
            _json_objects_icontains(ApplicantProfile, ApplicantProfile.education, ["field"], term),
        ])
    return or_(*matches)


def _applicant_filter_criteria(filters: ApplicantFilters) -> list:
    criteria = []
    if filters.skills:
        criteria.append(_json_objects_key_in(ApplicantProfile, ApplicantProfile.skills, "name", filters.skills))
    if filters.job_types:
        criteria.append(
            _json_array_contains_any(ApplicantProfile, ApplicantProfile.preferred_job_types, filters.job_types)
        )
    if filters.remote is not None:
        criteria.append(ApplicantProfile.is_remote_only.is_(filters.remote))
    return criteria


def applicant_store_query(query: SearchQuery, full_text: bool = True) -> StoreQuery:
    criteria = _applicant_filter_criteria(query.filters)
    if query.free_text:
        criteria.append(_applicant_text_criterion(query.free_text, full_text))
    return StoreQuery(
        criteria=criteria,
        order_by=_NEWEST_APPLICANTS,
        offset=query.offset,
        limit=query.page_size,
    )


def job_recommendation_store_query(rec: JobRecommendationQuery) -> StoreQuery:
    signals = []
    for skill in rec.skills:
        signals.extend([
            Job.description.icontains(skill, autoescape=True),
            _json_array_icontains(Job, Job.requirements, skill),
            _json_array_icontains(Job, Job.responsibilities, skill),
        ])
    if rec.skills:
        signals.append(_json_array_contains_any(Job, Job.tags, rec.skills))
    for title in rec.titles:
        signals.append(Job.position.icontains(title, autoescape=True))

    criteria = [or_(*signals)] if signals else [false()]
    if rec.remote_only:
        criteria.append(Job.location_remote.is_(True))
    if rec.job_types:
        criteria.append(Job.job_type.in_(rec.job_types))
    return StoreQuery(criteria=criteria, order_by=_NEWEST_JOBS, limit=rec.limit)


def _padded_words(texts: list[str]) -> str:
    words = (word.strip(_EDGE_PUNCTUATION) for text_ in texts for word in text_.lower().split())
    return " " + " ".join(word for word in words if word) + " "


def candidate_recommendation_store_query(rec: CandidateRecommendationQuery) -> StoreQuery:
    signals = []
    if rec.requirements:
        # A skill matches when its name appears as whole words in the requirements
        haystack = literal(_padded_words(rec.requirements), type_=String)
        elements = _json_elements(ApplicantProfile.skills)
        skill_name = func.lower(func.json_extract(elements.c.value, "$.name"), type_=String)
        signals.append(
            select(elements.c.value)
            .where(func.length(skill_name) > 0)
            .where(func.instr(haystack, " " + skill_name + " ") > 0)
            .correlate(ApplicantProfile.__table__)
            .exists()
        )
    if rec.position.strip():
        signals.append(_json_objects_icontains(
            ApplicantProfile, ApplicantProfile.work_experience, ["position"], rec.position.strip()
        ))

    criteria = [or_(*signals)] if signals else [false()]
    if rec.exclude_remote_only:
        criteria.append(ApplicantProfile.is_remote_only.is_(False))
    return StoreQuery(criteria=criteria, order_by=_NEWEST_APPLICANTS, limit=rec.limit)
