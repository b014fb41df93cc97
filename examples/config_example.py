"""
Configuration Examples for api-call
Demonstrates the ways to configure request execution
"""

from api_call import (
    ApiCallConfig,
    ConfigLoader,
    ConfigValidator,
    configure_logging,
    get,
)


# =============================================================================
# Example 1: Programmatic Configuration
# =============================================================================

def programmatic_config_example() -> ApiCallConfig:
    """Build the configuration in code"""
    loader = ConfigLoader()

    return loader.load(
        env=False,
        overrides={
            # Sent with a body when no Content-Type header is given
            "default_content_type": "application/json",
            # Keep stdout quiet, rely on the returned Response
            "print_diagnostics": False,
            "enable_audit_log": True,
            "log_level": "INFO",
        },
    )


# =============================================================================
# Example 2: Environment Variables Configuration
# =============================================================================

def env_config_example() -> ApiCallConfig:
    """
    Load configuration from environment variables

    Set these environment variables before running:

    export API_CALL_DEFAULT_CONTENT_TYPE="application/json"
    export API_CALL_PRINT_DIAGNOSTICS="false"
    export API_CALL_ENABLE_AUDIT_LOG="true"
    export API_CALL_LOG_LEVEL="DEBUG"
    """
    loader = ConfigLoader()
    return loader.load(env=True)


# =============================================================================
# Example 3: Merged Configuration (File + Environment + Programmatic)
# =============================================================================

def merged_config_example() -> ApiCallConfig:
    """
    Merge configuration from multiple sources
    Priority: programmatic > environment > file
    """
    loader = ConfigLoader()

    return loader.load(
        file="./config/api_call.json",
        env=True,
        overrides={"print_diagnostics": True},
    )


# =============================================================================
# Example 4: Creating a Configuration Template
# =============================================================================

def create_config_template_example() -> None:
    """Create a template configuration file"""
    loader = ConfigLoader()
    loader.create_template("./config/api_call.template.json")

    print("Configuration template created at ./config/api_call.template.json")


# =============================================================================
# Example 5: Configuration Validation
# =============================================================================

def validation_example() -> None:
    """Validate configuration before use"""
    validator = ConfigValidator()

    result = validator.validate({
        "default_content_type": "json",
        "log_level": "LOUD",
    })

    if not result.valid:
        print("Configuration validation failed:")
        for error in result.errors:
            print(f"  - {error.field}: {error.message}")


# =============================================================================
# Example 6: Audited Request
# =============================================================================

def audited_request_example() -> None:
    """Send a request and collect its audit entry"""
    config = programmatic_config_example()
    configure_logging(config.log_level)

    response = (
        get("https://jsonplaceholder.typicode.com/posts/1", config)
        .header("Accept", "application/json")
        .audit_log(lambda entry: print(f"audit: {entry.request_id} {entry.status_code}"))
        .execute()
    )
    print(f"Status: {response.status_code}")


# =============================================================================
# Run Examples
# =============================================================================

if __name__ == "__main__":
    print("=== api-call Configuration Examples ===\n")

    print("5. Configuration Validation:")
    validation_example()
    print()

    print("6. Audited Request:")
    audited_request_example()
