pytest_plugins = ["pytester", "harness.hooks", "harness.steps.api_steps"]
