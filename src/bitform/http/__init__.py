"""HTTP message models — provider-neutral Request and Response."""
