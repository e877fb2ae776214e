"""
Seed records for DemoBookhubService.

Payloads use the same camelCase shape the REST API returns so that the demo
service exercises the same parsing paths as the HTTP service.
"""

DEMO_POLICIES = [
    {
        "policyId": index,
        "policyTitle": title,
        "policyDescription": f"{title} for the season.",
        "policyType": policy_type,
        "totalPriceAchieve": 50000 if policy_type == "TOTAL_PRICE_DISCOUNT" else None,
        "discountPercent": percent,
        "startDate": start,
        "endDate": end,
    }
    for index, (title, policy_type, percent, start, end) in enumerate(
        [
            ("Spring reading week", "BOOK_DISCOUNT", 10, "2025-03-01", "2025-03-07"),
            ("Novel month", "CATEGORY_DISCOUNT", 15, "2025-04-01", "2025-04-30"),
            ("Big basket", "TOTAL_PRICE_DISCOUNT", 5, "2025-05-01", "2025-05-31"),
            ("Children's day", "CATEGORY_DISCOUNT", 20, "2025-05-01", "2025-05-05"),
            ("Summer sale", "BOOK_DISCOUNT", 30, "2025-07-01", "2025-07-31"),
            ("Back to school", "CATEGORY_DISCOUNT", 10, "2025-08-15", "2025-09-15"),
            ("Autumn classics", "BOOK_DISCOUNT", 12, "2025-10-01", "2025-10-31"),
            ("Year end", "TOTAL_PRICE_DISCOUNT", 7, "2025-12-01", "2025-12-31"),
            ("New year", "BOOK_DISCOUNT", 8, "2026-01-01", "2026-01-10"),
            ("Comics weekend", "CATEGORY_DISCOUNT", 25, "2026-02-06", "2026-02-08"),
            ("Loyalty", "TOTAL_PRICE_DISCOUNT", 3, "2026-01-01", "2026-12-31"),
            ("Author signing", "BOOK_DISCOUNT", 15, "2026-03-20", "2026-03-21"),
        ],
        start=1,
    )
]

DEMO_PUBLISHERS = [
    {"publisherId": index, "publisherName": name}
    for index, name in enumerate(
        [
            "Minumsa",
            "Changbi",
            "Munhakdongne",
            "Gimm-Young",
            "Hanbit Media",
            "Penguin Books",
            "O'Reilly Media",
            "HarperCollins",
            "Vintage",
            "Bloomsbury",
            "Faber & Faber",
        ],
        start=1,
    )
]

DEMO_AUTHORS = [
    {"authorId": 1, "authorName": "Han Kang", "authorEmail": "hankang@example.com"},
    {"authorId": 2, "authorName": "Kim Young-ha", "authorEmail": "kyh@example.com"},
    {"authorId": 3, "authorName": "Haruki Murakami", "authorEmail": "hm@example.com"},
    {"authorId": 4, "authorName": "Kazuo Ishiguro", "authorEmail": "ki@example.com"},
    {"authorId": 5, "authorName": "Hannah Arendt", "authorEmail": "ha@example.com"},
]

DEMO_BRANCHES = [
    {"branchId": 1, "branchName": "Gangnam"},
    {"branchId": 2, "branchName": "Jongno"},
    {"branchId": 3, "branchName": "Busan Seomyeon"},
]

DEMO_BOOKS = [
    {
        "isbn": "9788936434120",
        "bookTitle": "Human Acts",
        "authorName": "Han Kang",
        "publisherName": "Changbi",
        "bookPrice": 15000,
        "bookStatus": "ACTIVE",
        "description": "Gwangju, 1980.",
        "policyId": None,
        "categoryId": 11,
    },
    {
        "isbn": "9788954651134",
        "bookTitle": "Diary of a Murderer",
        "authorName": "Kim Young-ha",
        "publisherName": "Munhakdongne",
        "bookPrice": 13500,
        "bookStatus": "ACTIVE",
        "description": "",
        "policyId": 2,
        "categoryId": 11,
    },
    {
        "isbn": "9780099448822",
        "bookTitle": "Norwegian Wood",
        "authorName": "Haruki Murakami",
        "publisherName": "Vintage",
        "bookPrice": 18000,
        "bookStatus": "ACTIVE",
        "description": "",
        "policyId": None,
        "categoryId": 21,
    },
    {
        "isbn": "9780571258093",
        "bookTitle": "Never Let Me Go",
        "authorName": "Kazuo Ishiguro",
        "publisherName": "Faber & Faber",
        "bookPrice": 17000,
        "bookStatus": "INACTIVE",
        "description": "",
        "policyId": None,
        "categoryId": 21,
    },
]

DEMO_STOCKS = [
    {
        "stockId": index,
        "bookIsbn": book["isbn"],
        "bookTitle": book["bookTitle"],
        "branchId": branch["branchId"],
        "branchName": branch["branchName"],
        "amount": (index * 7) % 23,
    }
    for index, (book, branch) in enumerate(
        [(book, branch) for book in DEMO_BOOKS for branch in DEMO_BRANCHES],
        start=1,
    )
]

DEMO_CATEGORY_TREES = {
    "DOMESTIC": [
        {
            "categoryId": 1,
            "categoryName": "Literature",
            "subCategories": [
                {"categoryId": 11, "categoryName": "Novels", "subCategories": []},
                {"categoryId": 12, "categoryName": "Poetry", "subCategories": []},
            ],
        },
        {
            "categoryId": 2,
            "categoryName": "Humanities",
            "subCategories": [
                {"categoryId": 13, "categoryName": "History", "subCategories": []},
            ],
        },
        {"categoryId": 3, "categoryName": "Magazines", "subCategories": []},
    ],
    "FOREIGN": [
        {
            "categoryId": 4,
            "categoryName": "Fiction",
            "subCategories": [
                {"categoryId": 21, "categoryName": "Contemporary", "subCategories": []},
                {"categoryId": 22, "categoryName": "Classics", "subCategories": []},
            ],
        },
        {
            "categoryId": 5,
            "categoryName": "Philosophy",
            "subCategories": [
                {"categoryId": 23, "categoryName": "Political", "subCategories": []},
            ],
        },
    ],
}

DEMO_EMPLOYEES = [
    {
        "loginId": "admin01",
        "email": "admin01@bookhub.example",
        "phoneNumber": "01012345678",
    },
]
