import pytest

from bookhub_admin.models.auth import PasswordChangeEmailForm, SignUpForm
from bookhub_admin.models.catalog import (
    Book,
    BookUpdateForm,
    CategoryNode,
    PolicyForm,
    StockUpdateForm,
)
from bookhub_admin.models.common import (
    LOCAL_VALIDATION,
    TRANSPORT_FAILURE,
    Envelope,
    ListQuery,
    StockQuery,
    normalize_page,
)


def test_normalize_page_none_is_empty():
    page = normalize_page(None)

    assert page.is_empty
    assert page.total_pages == 0
    assert page.current_page == 0


def test_normalize_page_bare_list_is_one_page():
    page = normalize_page([{"v": 1}, {"v": 2}], lambda raw: raw["v"])

    assert tuple(page.content) == (1, 2)
    assert page.total_pages == 1
    assert page.current_page == 0


def test_normalize_page_paged_payload():
    page = normalize_page({"content": [{"v": 3}], "totalPages": 4, "currentPage": 2})

    assert tuple(page.content) == ({"v": 3},)
    assert page.total_pages == 4
    assert page.current_page == 2


def test_normalize_page_reads_nested_page_counts():
    page = normalize_page(
        {"content": [{"v": 5}], "page": {"size": 10, "number": 1, "totalPages": 3}}
    )

    assert page.total_pages == 3
    assert page.current_page == 1


def test_normalize_page_tolerates_missing_counts():
    page = normalize_page({"content": None, "totalPages": None})

    assert page.is_empty
    assert page.total_pages == 0


def test_normalize_page_rejects_other_shapes():
    with pytest.raises(ValueError):
        normalize_page("nope")
    with pytest.raises(ValueError):
        normalize_page({"items": []})


def test_envelope_codes():
    assert Envelope.success().ok
    assert not Envelope.failure("x").ok
    assert Envelope.local("x").code == LOCAL_VALIDATION
    assert Envelope.from_dict(None).code == TRANSPORT_FAILURE
    assert Envelope.from_dict({"code": "SU", "data": [1]}).data == [1]
    assert Envelope.from_dict({"message": "no code"}).code == TRANSPORT_FAILURE


def test_list_query_params_omit_blank_filters():
    assert ListQuery(keyword="  ", page=1, page_size=20).params() == {
        "page": 1,
        "size": 20,
    }
    params = ListQuery(
        keyword=" sale ",
        type_filter="BOOK_DISCOUNT",
        start_date="2025-01-01",
        end_date="2025-12-31",
    ).params(type_param="policyType")
    assert params == {
        "page": 0,
        "size": 10,
        "keyword": "sale",
        "policyType": "BOOK_DISCOUNT",
        "start": "2025-01-01",
        "end": "2025-12-31",
    }


def test_stock_query_adds_branch():
    assert StockQuery(branch_id=3).params()["branchId"] == 3
    assert "branchId" not in StockQuery().params()
    assert "branch_id" in StockQuery.filter_names()
    assert "page" not in ListQuery.filter_names()


def test_category_node_from_nested_payload():
    node = CategoryNode.from_dict(
        {
            "categoryId": 1,
            "categoryName": "Literature",
            "subCategories": [{"categoryId": 11, "categoryName": "Novels"}],
        }
    )

    assert node.is_branch
    assert node.sub_categories[0].category_name == "Novels"
    assert not node.sub_categories[0].is_branch
    assert node.to_dict()["sub_categories"][0]["category_id"] == 11


def test_book_from_dict_and_update_form():
    book = Book.from_dict(
        {"isbn": 9788936434120, "bookTitle": "Human Acts", "bookPrice": "15000", "policyId": 2}
    )

    assert book.isbn == "9788936434120"
    assert book.book_price == 15000
    assert book.formatted_price == "15,000 KRW"
    payload = BookUpdateForm.from_book(book).to_payload()
    assert payload["policyId"] == 2
    assert "policyId" not in BookUpdateForm(isbn="1", book_price=1).to_payload()


def test_form_payloads_use_api_names():
    assert PolicyForm(policy_title="A", start_date="").to_payload()["startDate"] is None
    assert StockUpdateForm(type="OUT", amount=2, branch_id=1, book_isbn="9").to_payload() == {
        "type": "OUT",
        "amount": 2,
        "branchId": 1,
        "bookIsbn": "9",
        "description": None,
    }
    assert SignUpForm(login_id="abcd", branch_id=2).to_payload()["loginId"] == "abcd"
    assert not PasswordChangeEmailForm(login_id="abcd", email="a@b.cd").is_complete
