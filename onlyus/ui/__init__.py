"""Framework-independent profile screen: state, flows and render function."""
