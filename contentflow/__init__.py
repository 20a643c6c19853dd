"""contentflow: flows, approvals, content instances and subscription billing."""
