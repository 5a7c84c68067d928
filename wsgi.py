from gym_checkin.main import create_app

app = create_app()
