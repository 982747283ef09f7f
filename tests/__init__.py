"""ZIGJ test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- e2e/          : The `zigj` command driven through Click's CliRunner.

General guidance
- Keep unit fast and deterministic; prefer fakes (MemoryReporter, FakeTimer) over mocks.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Markers: unit (applied automatically under unit/), e2e, property.
"""
