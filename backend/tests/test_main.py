from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from payslip_api import repository
from payslip_api.routers import payslips as payslips_router


def test_read_root(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.json() == {"message": "Payslip Generator API"}


def test_health(client):
    assert client.get('/health').json() == {"ok": True}


def test_create_employee(client):
    res = client.post('/employees', json={
        'name': 'Ana',
        'email': 'ana@x.com',
        'position': 'Engineer',
    })
    assert res.status_code == 201
    emp = res.json()
    assert emp['id']
    assert emp['name'] == 'Ana'
    assert emp['department'] is None
    assert 'createdAt' in emp


def test_create_employee_validation(client):
    res = client.post('/employees', json={'name': '', 'email': 'nope', 'position': ''})
    assert res.status_code == 400
    body = res.json()
    assert body['error'] == 'Validation failed'
    assert {d['message'] for d in body['details']} == {
        'Name is required', 'Invalid email address', 'Position is required',
    }


def test_create_employee_duplicate_email(client, employee):
    res = client.post('/employees', json={
        'name': 'Ana Again',
        'email': 'ana@x.com',
        'position': 'Manager',
    })
    assert res.status_code == 400
    assert res.json()['details'] == [{'field': 'email', 'message': 'Email already exists'}]


def test_invalid_json_body(client):
    res = client.post('/employees', content=b'{not json', headers={'content-type': 'application/json'})
    assert res.status_code == 400
    assert res.json()['error'] == 'Validation failed'
    assert [d['field'] for d in res.json()['details']] == ['body']


def test_list_employees_newest_first_with_counts(client, employee, make_payslip):
    make_payslip()
    make_payslip(payDate='2024-03-01')
    second = client.post('/employees', json={
        'name': 'Bo', 'email': 'bo@x.com', 'position': 'Designer', 'department': 'Product',
    }).json()

    res = client.get('/employees')
    assert res.status_code == 200
    listed = res.json()
    assert [e['id'] for e in listed] == [second['id'], employee['id']]
    assert listed[0]['payslipCount'] == 0
    assert listed[1]['payslipCount'] == 2


def test_create_payslip_computes_totals(client, employee):
    res = client.post('/payslips', json={
        'employeeId': employee['id'],
        'payPeriodStart': '2024-01-01',
        'payPeriodEnd': '2024-01-31',
        'payDate': '2024-02-01',
        'basicSalary': 1000,
        'tax': 100,
    })
    assert res.status_code == 201
    p = res.json()
    assert p['totalEarnings'] == 1000
    assert p['totalDeductions'] == 100
    assert p['netPay'] == 900
    assert p['employee']['id'] == employee['id']
    assert p['employee']['name'] == 'Ana'


def test_create_payslip_defaults(make_payslip):
    p = make_payslip()
    for field in ('houseAllowance', 'transportAllowance', 'otherEarnings',
                  'tax', 'insurance', 'pension', 'otherDeductions'):
        assert p[field] == 0
    assert p['totalEarnings'] == 1000
    assert p['totalDeductions'] == 0
    assert p['netPay'] == 1000


def test_client_totals_are_overwritten(make_payslip):
    p = make_payslip(houseAllowance=200.5, pension=50, totalEarnings=1, totalDeductions=2, netPay=3)
    assert p['totalEarnings'] == 1200.5
    assert p['totalDeductions'] == 50
    assert p['netPay'] == 1150.5


def test_create_payslip_validation(client):
    res = client.post('/payslips', json={
        'employeeId': '',
        'payPeriodStart': '2024-01-01',
        'payPeriodEnd': '2024-01-31',
        'payDate': '2024-02-01',
        'basicSalary': -10,
    })
    assert res.status_code == 400
    details = {d['field']: d['message'] for d in res.json()['details']}
    assert details == {
        'employeeId': 'Employee ID is required',
        'basicSalary': 'Basic salary must be positive',
    }


def test_create_payslip_unknown_employee(client):
    res = client.post('/payslips', json={
        'employeeId': 'missing',
        'payPeriodStart': '2024-01-01',
        'payPeriodEnd': '2024-01-31',
        'payDate': '2024-02-01',
        'basicSalary': 1000,
    })
    assert res.status_code == 404
    assert res.json() == {'error': 'Employee not found'}


def test_get_payslip_round_trip(client, make_payslip):
    created = make_payslip(houseAllowance=150.25, insurance=20, notes='Bonus next month')
    res = client.get(f"/payslips/{created['id']}")
    assert res.status_code == 200
    assert res.json() == created


def test_get_missing_payslip(client):
    res = client.get('/payslips/does-not-exist')
    assert res.status_code == 404
    assert res.json() == {'error': 'Payslip not found'}


def test_list_filters_and_orders_by_pay_date(client, employee, make_payslip):
    jan = make_payslip(payDate='2024-01-31')
    mar = make_payslip(payDate='2024-03-31')
    feb = make_payslip(payDate='2024-02-29')

    other = client.post('/employees', json={
        'name': 'Bo', 'email': 'bo@x.com', 'position': 'Designer',
    }).json()
    make_payslip(employeeId=other['id'], payDate='2024-04-30')

    res = client.get('/payslips', params={'employeeId': employee['id']})
    assert res.status_code == 200
    listed = res.json()
    assert [p['id'] for p in listed] == [mar['id'], feb['id'], jan['id']]
    assert all(p['employeeId'] == employee['id'] for p in listed)

    everything = client.get('/payslips').json()
    assert len(everything) == 4
    assert everything[0]['employee']['name'] == 'Bo'


def test_delete_payslip(client, make_payslip):
    p = make_payslip()
    res = client.delete(f"/payslips/{p['id']}")
    assert res.status_code == 200
    assert res.json() == {'message': 'Payslip deleted successfully'}
    assert client.get(f"/payslips/{p['id']}").status_code == 404

    again = client.delete(f"/payslips/{p['id']}")
    assert again.status_code == 404
    assert again.json() == {'error': 'Payslip not found'}


def test_storage_failure_is_not_leaked(client, monkeypatch):
    def boom(db):
        raise OperationalError('SELECT', {}, Exception('disk I/O error at /var/db'))

    monkeypatch.setattr(repository, 'list_employees', boom)
    res = client.get('/employees')
    assert res.status_code == 500
    assert res.json() == {'error': 'Failed to fetch employees'}


def test_export_pdf(client, make_payslip, monkeypatch):
    p = make_payslip()
    rendered = []

    def fake_render(record, generated_at=None):
        rendered.append(record)
        return b'%PDF-1.7 fake'

    monkeypatch.setattr(payslips_router, 'render_payslip_pdf', fake_render)
    res = client.get(f"/payslips/{p['id']}/pdf")
    assert res.status_code == 200
    assert res.headers['content-type'] == 'application/pdf'
    assert 'payslip_Ana_February_1,_2024.pdf' in res.headers['content-disposition']
    assert res.content == b'%PDF-1.7 fake'
    assert rendered[0].net_pay == 1000


def test_export_pdf_render_failure(client, make_payslip, monkeypatch):
    p = make_payslip()

    def broken(record, generated_at=None):
        raise RuntimeError('WeasyPrint is required to render payslip PDFs')

    monkeypatch.setattr(payslips_router, 'render_payslip_pdf', broken)
    res = client.get(f"/payslips/{p['id']}/pdf")
    assert res.status_code == 500
    assert res.json() == {'error': 'Failed to render payslip'}


def test_export_pdf_missing(client):
    assert client.get('/payslips/nope/pdf').status_code == 404


def test_delete_of_payslip_removed_elsewhere_is_not_found(db_session, make_payslip):
    p = make_payslip()
    # loaded into this session, then removed behind its back
    assert repository.get_payslip(db_session, p['id']) is not None
    db_session.execute(text("DELETE FROM payslips WHERE id = :id"), {'id': p['id']})
    assert repository.delete_payslip(db_session, p['id']) is False
