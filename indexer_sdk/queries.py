"""GraphQL documents for the indexer management API, one per operation."""

ACTION_RESULT_FIELDS = """
    id
    type
    deploymentID
    allocationID
    amount
    poi
    force
    source
    reason
    priority
    status
    transaction
    failureReason
    protocolNetwork
"""

QUEUE_ACTIONS = f"""
mutation queueActions($actions: [ActionInput!]!) {{
  queueActions(actions: $actions) {{{ACTION_RESULT_FIELDS}  }}
}}
"""

APPROVE_ACTIONS = f"""
mutation approveActions($actionIDs: [Int!]!) {{
  approveActions(actionIDs: $actionIDs) {{{ACTION_RESULT_FIELDS}  }}
}}
"""

EXECUTE_APPROVED_ACTIONS = f"""
mutation executeApprovedActions {{
  executeApprovedActions {{{ACTION_RESULT_FIELDS}  }}
}}
"""

CANCEL_ACTIONS = f"""
mutation cancelActions($actionIDs: [Int!]!) {{
  cancelActions(actionIDs: $actionIDs) {{{ACTION_RESULT_FIELDS}  }}
}}
"""

DELETE_ACTIONS = f"""
mutation deleteActions($actionIDs: [Int!]!) {{
  deleteActions(actionIDs: $actionIDs) {{{ACTION_RESULT_FIELDS}  }}
}}
"""

UPDATE_ACTIONS = f"""
mutation updateActions($filter: ActionFilter!, $action: ActionUpdateInput!) {{
  updateActions(filter: $filter, action: $action) {{{ACTION_RESULT_FIELDS}  }}
}}
"""

ACTION = f"""
query action($actionID: Int!) {{
  action(actionID: $actionID) {{{ACTION_RESULT_FIELDS}  }}
}}
"""

ACTIONS = f"""
query actions(
  $filter: ActionFilter!
  $first: Int
  $orderBy: ActionParams
  $orderDirection: OrderDirection
) {{
  actions(filter: $filter, orderBy: $orderBy, orderDirection: $orderDirection, first: $first) {{{ACTION_RESULT_FIELDS}  }}
}}
"""
