"""GraphQL query document for paging through a classic project board."""

# Columns are paged one at a time so the card cursor always belongs to the
# single column returned alongside it.
PROJECT_PAGE_QUERY = """
query ($organisation_name: String!, $project_name: String, $column_cursor: String, $card_cursor: String) {
    organization(login: $organisation_name) {
        name
        projects(first: 1, search: $project_name) {
            nodes {
                name
                columns(first: 1, after: $column_cursor) {
                    totalCount
                    pageInfo {
                        endCursor
                        hasNextPage
                    }
                    nodes {
                        name
                        cards(first: 100, archivedStates: [NOT_ARCHIVED], after: $card_cursor) {
                            totalCount
                            pageInfo {
                                endCursor
                                hasNextPage
                            }
                            nodes {
                                note
                                content {
                                    ... on Issue {
                                        title
                                        number
                                        repository {
                                            name
                                        }
                                        assignees(first: 3) {
                                            totalCount
                                            nodes {
                                                login
                                                name
                                            }
                                        }
                                        labels(first: 20) {
                                            nodes {
                                                name
                                            }
                                        }
                                        timelineItems(last: 200, itemTypes: [ADDED_TO_PROJECT_EVENT, MOVED_COLUMNS_IN_PROJECT_EVENT]) {
                                            nodes {
                                                __typename
                                                ... on AddedToProjectEvent {
                                                    projectColumnName
                                                    createdAt
                                                }
                                                ... on MovedColumnsInProjectEvent {
                                                    projectColumnName
                                                    createdAt
                                                }
                                            }
                                        }
                                    }
                                    ... on PullRequest {
                                        title
                                        number
                                        repository {
                                            name
                                        }
                                        assignees(first: 1) {
                                            totalCount
                                            nodes {
                                                login
                                                name
                                            }
                                        }
                                    }
                                }
                            }
                        }
                    }
                }
            }
        }
    }
}
"""

# Preview media type required for projectColumnName on timeline events.
PREVIEW_ACCEPT = "application/vnd.github.starfox-preview+json"
