"""
GET request sample
"""

from api_call import get


def main() -> None:
    (
        get("https://jsonplaceholder.typicode.com/posts")  # Required: the URL
        .header("Accept", "application/json")  # Optional: repeat for more headers
        .query_param("userId", "1")  # Optional: query parameters
        # Optional: choose ONE authentication method if needed
        # .basic_auth("username", "password")
        # .bearer_auth("your-token")
        # .api_key_auth("X-API-Key", "your-api-key")
        .execute()  # Required: send the request
    )


if __name__ == "__main__":
    main()
