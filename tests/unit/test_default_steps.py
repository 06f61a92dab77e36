"""
Unit tests for the default sort, paginate and retrieve steps.

The steps run against the in-memory repository so the whole
base -> sort -> paginate -> retrieve chain can be checked end to end.
"""

import pytest

from record_list.domain.base_enums import SortDirection
from record_list.domain.errors import (
    MissingOptionError,
    ParameterError,
    StepConfigurationError,
)
from record_list.domain.state import RecordList
from record_list.pipeline import RecordListPipeline
from record_list.repositories import memory
from record_list.repositories.memory import MemoryQuery, MemoryRepository
from record_list.steps import PaginateStep, RetrieveStep, SortStep
from record_list.steps.sort import to_direction

PRODUCTS = [
    {"id": 1, "name": "lamp", "price": 40},
    {"id": 2, "name": "desk", "price": 250},
    {"id": 3, "name": "chair", "price": 90},
    {"id": 4, "name": "shelf", "price": None},
    {"id": 5, "name": "rug", "price": 120},
]


class ProductBase:
    def execute(self, record_list, step_name, options):
        return record_list.update(accumulator=MemoryQuery(rows=options["rows"]))


def names(rows):
    return [row["name"] for row in rows]


@pytest.fixture
def repo():
    return MemoryRepository()


@pytest.fixture
def products(repo):
    return RecordListPipeline(
        [
            ("base", {"impl": ProductBase(), "rows": PRODUCTS}),
            ("sort", {"callback": memory.order_by, "default_sort": "name", "default_order": "asc"}),
            ("paginate", {"repo": repo, "per_page": 2, "offset_callback": memory, "limit_callback": memory}),
            ("retrieve", {"repo": repo}),
        ],
        name="products",
    )


class TestSortStep:
    """SortStep reads sort/order from parameters or falls back to defaults."""

    def test_default_sort(self, products):
        sorted_list = products.sort({})

        assert sorted_list.accumulator.ordering == ((SortDirection.ASC_NULLS_LAST, "name"),)
        assert sorted_list.executed_steps == ("sort", "base")

    def test_sort_from_parameters(self, products):
        result = products.retrieve({"sort": "price", "order": "DESC", "per_page": "10"})

        assert names(result.results) == ["desk", "rug", "chair", "lamp", "shelf"]

    def test_nested_parameter_paths(self, repo):
        step = SortStep()
        record_list = RecordList(
            accumulator=MemoryQuery(rows=PRODUCTS),
            parameters={"table": {"sort": "price", "order": "asc"}},
        )

        result = step.execute(
            record_list,
            "sort",
            {"callback": memory.order_by, "sort_keys": ["table", "sort"], "order_keys": ["table", "order"]},
        )

        assert result.accumulator.ordering == ((SortDirection.ASC_NULLS_LAST, "price"),)

    def test_nulls_last_disabled(self):
        record_list = RecordList(accumulator=MemoryQuery(), parameters={"sort": "name", "order": "desc"})

        result = SortStep().execute(record_list, "sort", {"callback": memory.order_by, "nulls_last": False})

        assert result.accumulator.ordering == ((SortDirection.DESC, "name"),)

    def test_callback_receives_query_and_ordering(self):
        received = []

        def callback(query, ordering):
            received.append((query, ordering))
            return "ordered"

        record_list = RecordList(accumulator="base", parameters={})
        result = SortStep().execute(
            record_list, "sort", {"callback": callback, "default_sort": "name", "default_order": "asc"}
        )

        assert result.accumulator == "ordered"
        assert received == [("base", [(SortDirection.ASC_NULLS_LAST, "name")])]

    def test_unknown_order(self):
        record_list = RecordList(accumulator=MemoryQuery(), parameters={"sort": "name", "order": "sideways"})

        with pytest.raises(ParameterError):
            SortStep().execute(record_list, "sort", {"callback": memory.order_by})

    def test_missing_default_sort(self):
        record_list = RecordList(accumulator=MemoryQuery(), parameters={"order": "asc"})

        with pytest.raises(MissingOptionError) as exc_info:
            SortStep().execute(record_list, "sort", {"callback": memory.order_by})

        assert exc_info.value.option == "default_sort"

    def test_missing_callback(self):
        record_list = RecordList(parameters={"sort": "name", "order": "asc"})

        with pytest.raises(MissingOptionError):
            SortStep().execute(record_list, "sort", {})

    def test_wrong_step_name(self):
        with pytest.raises(StepConfigurationError):
            SortStep().execute(RecordList(), "order", {})

    @pytest.mark.parametrize(
        "order, expected",
        [
            ("asc", SortDirection.ASC),
            ("Desc", SortDirection.DESC),
            ("desc_nulls_last", SortDirection.DESC_NULLS_LAST),
            (SortDirection.ASC_NULLS_LAST, SortDirection.ASC_NULLS_LAST),
        ],
    )
    def test_to_direction(self, order, expected):
        assert to_direction(order) is expected


class TestPaginateStep:
    """PaginateStep counts, builds the descriptor and narrows the query."""

    def test_first_page(self, products):
        first_page = products.paginate({})

        assert first_page.pagination.records_count == 5
        assert first_page.pagination.per_page == 2
        assert first_page.pagination.total_pages == 3
        assert first_page.pagination.next_page == 2
        assert first_page.accumulator.offset == 0
        assert first_page.accumulator.limit == 2
        assert first_page.loaded is False
        assert first_page.executed_steps == ("paginate", "sort", "base")

    def test_page_and_per_page_from_parameters(self, products):
        page = products.paginate({"page": "2", "per_page": "3"})

        assert page.pagination.current_page == 2
        assert page.pagination.per_page == 3
        assert page.pagination.records_from == 4
        assert page.pagination.records_to == 5
        assert page.accumulator.offset == 3
        assert page.accumulator.limit == 3

    def test_custom_parameter_paths(self, repo):
        record_list = RecordList(
            accumulator=MemoryQuery(rows=PRODUCTS),
            parameters={"paging": {"page": "3", "size": "2"}},
        )

        result = PaginateStep().execute(
            record_list,
            "paginate",
            {
                "repo": repo,
                "offset_callback": memory.offset,
                "limit_callback": memory.limit,
                "page_keys": ["paging", "page"],
                "per_page_keys": ["paging", "size"],
            },
        )

        assert result.pagination.current_page == 3
        assert result.pagination.records_from == 5
        assert result.pagination.records_to == 5
        assert result.pagination.next_page is None

    def test_max_per_page_caps_requests(self, repo):
        record_list = RecordList(accumulator=MemoryQuery(rows=PRODUCTS), parameters={"per_page": "500"})

        result = PaginateStep().execute(
            record_list,
            "paginate",
            {"repo": repo, "offset_callback": memory, "limit_callback": memory, "max_per_page": 4},
        )

        assert result.pagination.per_page == 4
        assert result.accumulator.limit == 4

    def test_max_per_page_is_parsed(self, repo):
        record_list = RecordList(accumulator=MemoryQuery(rows=PRODUCTS), parameters={"per_page": "500"})

        result = PaginateStep().execute(
            record_list,
            "paginate",
            {"repo": repo, "offset_callback": memory, "limit_callback": memory, "max_per_page": "4"},
        )

        assert result.pagination.per_page == 4
        assert result.accumulator.limit == 4

    @pytest.mark.parametrize("max_per_page", [0, "0", -5])
    def test_max_per_page_below_one_is_rejected(self, repo, max_per_page):
        record_list = RecordList(accumulator=MemoryQuery(rows=PRODUCTS), parameters={"per_page": "5"})

        with pytest.raises(StepConfigurationError):
            PaginateStep().execute(
                record_list,
                "paginate",
                {"repo": repo, "offset_callback": memory, "limit_callback": memory, "max_per_page": max_per_page},
            )

    def test_unparseable_max_per_page_is_rejected(self, repo):
        record_list = RecordList(accumulator=MemoryQuery(rows=PRODUCTS), parameters={"per_page": "5"})

        with pytest.raises(ParameterError):
            PaginateStep().execute(
                record_list,
                "paginate",
                {"repo": repo, "offset_callback": memory, "limit_callback": memory, "max_per_page": "lots"},
            )

    def test_count_by(self):
        class RecordingRepo:
            def __init__(self):
                self.count_by = None

            def count(self, query, count_by):
                self.count_by = count_by
                return 0

            def all(self, query):
                return []

        repo = RecordingRepo()
        record_list = RecordList(accumulator=MemoryQuery())

        result = PaginateStep().execute(
            record_list,
            "paginate",
            {"repo": repo, "per_page": 10, "count_by": "uuid", "offset_callback": memory, "limit_callback": memory},
        )

        assert repo.count_by == "uuid"
        assert result.pagination.records_count == 0
        assert result.pagination.records_from == 0
        assert result.pagination.records_to is None

    def test_missing_per_page(self, repo):
        record_list = RecordList(accumulator=MemoryQuery(rows=PRODUCTS))

        with pytest.raises(MissingOptionError) as exc_info:
            PaginateStep().execute(
                record_list, "paginate", {"repo": repo, "offset_callback": memory, "limit_callback": memory}
            )

        assert exc_info.value.details == {"step": "paginate", "option": "per_page"}

    def test_missing_repo(self):
        with pytest.raises(MissingOptionError) as exc_info:
            PaginateStep().execute(RecordList(), "paginate", {"per_page": 10})

        assert exc_info.value.option == "repo"

    def test_unparsable_page(self, products):
        with pytest.raises(ParameterError):
            products.paginate({"page": "first"})

    def test_invalid_callback(self, repo):
        record_list = RecordList(accumulator=MemoryQuery(rows=PRODUCTS))

        with pytest.raises(StepConfigurationError):
            PaginateStep().execute(
                record_list,
                "paginate",
                {"repo": repo, "per_page": 2, "offset_callback": "offset", "limit_callback": memory},
            )


class TestRetrieveStep:
    """RetrieveStep loads the records."""

    def test_retrieves_the_page(self, products):
        second_page = products.retrieve({"page": "2"})

        assert second_page.loaded
        assert names(second_page.results) == ["lamp", "rug"]
        assert second_page.executed_steps == ("retrieve", "paginate", "sort", "base")

    def test_empty_results_are_still_loaded(self, repo):
        record_list = RecordList(accumulator=memory.where(MemoryQuery(rows=PRODUCTS), lambda row: False))

        result = RetrieveStep().execute(record_list, "retrieve", {"repo": repo})

        assert result.loaded is True
        assert result.results == []

    def test_page_after_the_end_is_empty(self, products):
        result = products.retrieve({"page": "9"})

        assert result.loaded
        assert result.results == []
        assert result.pagination.records_offset == 16

    def test_missing_repo(self):
        with pytest.raises(MissingOptionError):
            RetrieveStep().execute(RecordList(), "retrieve", {})

    def test_repository_errors_propagate(self):
        class BrokenRepo:
            def count(self, query, count_by):
                return 0

            def all(self, query):
                raise ConnectionError("database went away")

        with pytest.raises(ConnectionError):
            RetrieveStep().execute(RecordList(), "retrieve", {"repo": BrokenRepo()})
