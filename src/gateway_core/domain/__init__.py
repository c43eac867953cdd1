"""Domain layer - Payment entities, value objects and the error taxonomy.

This layer contains:
- Entities: Invoice, Receipt, RedirectionForm
- Value Objects: InvoiceId, TransactionId
- Domain Exceptions: business failures, protocol violations, validation errors

The domain layer has NO dependencies on HTTP clients or provider SDKs.
"""
