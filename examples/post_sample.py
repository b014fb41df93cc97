"""
POST request sample
"""

from api_call import post


# Put the body between the triple quotes
JSON_BODY = """
{
    "title": "foo",
    "body": "bar",
    "userId": 1
}
"""


def main() -> None:
    (
        post("https://jsonplaceholder.typicode.com/posts")  # Required: the URL
        .header("Accept", "application/json")  # Optional: repeat for more headers
        .header("Content-Type", "application/json")
        .body(JSON_BODY)  # Optional: request body
        .execute()  # Required: send the request
    )


if __name__ == "__main__":
    main()
