# myfinance

A small REST API for keeping track of personal finances. It keeps users and
income/expense transactions in JSON files, computes a balance per user and
can forward contact messages by e-mail over SMTP. It is built on Flask.

## Installation

```
pip install .
```

## Running the server

```
myfinance
```

Options:

| Option       | Default        | Meaning                                    |
|--------------|----------------|--------------------------------------------|
| `--host`     | `0.0.0.0`      | address to listen on                       |
| `--port`     | `8081`         | port to listen on                          |
| `--data-dir` | `~/myfinance`  | directory holding the JSON data files      |
| `--config`   | none           | YAML file with SMTP settings               |

Data is kept in `finances.json` and `users.json` inside the data directory,
which is created if it does not exist. The server is Flask's built-in server.

Cross-origin requests are accepted only from `http://localhost:8080`; a
request carrying any other foreign `Origin` header is answered with 403.

### SMTP settings

Without `--config` the SMTP host, port and credentials are empty, so
`/send-email` cannot deliver anything. A configuration file looks like this:

```yaml
smtp:
  host: smtp.example.com
  port: 587
  username: user@example.com
  password: password
```

Port 465 is used with implicit TLS; on any other port STARTTLS is used when
the server offers it. Messages are sent to the fixed address
`youremail@example.com`, with the sender's address in `From`, and a body of
the form `De: <name>` followed by the message.

## Endpoints

All routes live under `/api/v1`. Errors are returned as
`{"error": "<message>"}`.

| Method | Path                        | Purpose                                            |
|--------|-----------------------------|----------------------------------------------------|
| POST   | `/transactions`             | Add a transaction; returns it with its id (201)    |
| GET    | `/transactions/<userId>`    | List a user's transactions (`null` when none)      |
| GET    | `/balance/<userId>`         | `{"balance": ...}`: income minus expenses          |
| PUT    | `/transactions/<id>`        | Replace a transaction, keeping its id              |
| DELETE | `/transactions/<id>`        | Delete a transaction                               |
| POST   | `/users`                    | Register a user                                    |
| POST   | `/users/auth`               | Log in with e-mail and password                    |
| DELETE | `/users/<id>`               | Deactivate a user (empty 200 response)             |
| POST   | `/send-email`               | Send a contact message                             |

A transaction looks like this:

```json
{
  "type": "income",
  "amount": 3000,
  "category": "Salary",
  "date": "2023-06-15",
  "description": "June salary",
  "user_id": 1
}
```

`type` must be `income` or `expense`, and `date` must be written as
`yyyy-mm-dd`.

Registering a user:

```json
{"name": "Alice", "email": "alice@example.com", "password": "password"}
```

New users are active. Registering an e-mail address that is already taken
fails with 500 `Failed to add user`. Deleting a user does not remove the
record; it marks the user inactive, and inactive users can no longer log in.
A successful login returns the user's `id`, `name` and `email`.

A contact message has the fields `name`, `email`, `subject` and `message`.

## Using it as a library

```python
from myfinance.server import build_services, create_app

finance, users, email = build_services("/tmp/myfinance-data")
app = create_app(finance, users, email)
app.run(port=8081)
```

The pieces can be used on their own:

- `myfinance.models`: the `Transaction`, `User` and `EmailData` records with
  `from_dict` / `to_dict`, plus `parse_date` and `format_date`; bad input
  raises `ModelError`.
- `myfinance.storage`: `FileFinanceStorage` and `FileUserStorage` over a JSON
  file, and `default_data_dir()`.
- `myfinance.finance_service.FinanceService`: `add_transaction`,
  `transactions_for_user`, `balance_for_user`, `update_transaction`,
  `delete_transaction` (raising `TransactionNotFoundError`).
- `myfinance.user_service.UserService`: `add_user` (raising
  `EmailExistsError`), `authenticate` (returning `None` on failure),
  `delete_user` (raising `UserNotFoundError`).
- `myfinance.email_service.EmailService`: `build_message` and `send_email`.
- `myfinance.config`: `get_config()` and `load_config(filename)`.

## What it does not do

- Logging in issues no token or session; the other endpoints are open to
  any caller and do not check that a user exists.
- Passwords are stored and compared as plain text in `users.json`.
- Storage is plain JSON files rewritten on every change; there is no
  database.

## Running the tests

```
pip install .[test]
pytest
```