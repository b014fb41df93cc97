"""
OAuth2 client-credentials sample

The POST below is itself the token request: its body is replaced by the
form-encoded OAuth2 parameters. Take the access_token from the response
and pass it to bearer_auth() on the next request, e.g.

    {
        "token_type": "Bearer",
        "expires_in": 86400,
        "access_token": "UHyJ5wQmYv4bLPZplsZ4_MM4ecxUXIYlT",
        "scope": "access",
        "refresh_token": "bZxT8mm0cVldk8QBvmeGW0Tw"
    }
"""

from api_call import ConfigLoader, configure_logging, post


def main() -> None:
    # API_CALL_* environment variables may override the defaults
    config = ConfigLoader().load(env=True)
    configure_logging(config.log_level)

    # Put the required OAuth parameters here
    params = {
        "grant_type": "client_credentials",
        "client_id": "Abc1234567",
        "client_secret": "ENDWzXfqenUbDd0zKVz",
    }

    response = post("https://httpbin.org/anything", config).oauth2(params).execute()

    if response.is_success:
        print("Token response received, pass its access_token to bearer_auth()")


if __name__ == "__main__":
    main()
