from __future__ import annotations

# pod lib lint builds the library for every platform in the podspec
POD_LINT_TIMEOUT_SECONDS = 30 * 60.0

# pod repo push lints again before pushing to the spec repo
POD_PUSH_TIMEOUT_SECONDS = 30 * 60.0
