from physiohub.extensions import bcrypt
from physiohub.models.account_models import Account, Role
from physiohub.models.treatment_models import DEFAULT_EXERCISES, Exercise
from physiohub.services import auth_service


def test_init_db_is_idempotent(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['init-db'])

    assert result.exit_code == 0
    assert '0 exercise(s) added' in result.output
    assert Exercise.query.count() == len(DEFAULT_EXERCISES)


def test_create_admin(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=[
        'create-admin', '--username', 'root', '--password', 'Adm1n!pass',
        '--nhs-number', '1000000001', '--name', 'Gold', '--surname', 'Admin',
        '--email', 'gold@example.com',
    ])

    assert result.exit_code == 0, result.output
    assert Account.query.filter_by(username='root').one().role is Role.ADMIN
    assert auth_service.login('root', 'Adm1n!pass').role is Role.ADMIN


def test_create_admin_rejects_weak_password(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=[
        'create-admin', '--username', 'root', '--password', 'weak',
        '--nhs-number', '1000000001', '--name', 'Gold', '--surname', 'Admin',
        '--email', 'gold@example.com',
    ])

    assert result.exit_code != 0
    assert Account.query.count() == 0


def test_hash_password_is_peppered(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['hash-password', 'therapass'])

    digest = result.output.strip()
    assert bcrypt.check_password_hash(digest, 'therapass' + app.config['BCRYPT_PEPPER'])
    assert not bcrypt.check_password_hash(digest, 'therapass')
